"""Per-locale UI strings used by the chat session.

Every locale provides the same fixed set of fields; ``validate_translations``
is run at startup to fail fast on an incomplete table.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)


class UnsupportedLanguageError(ValueError):
    """Raised when a locale has no translation table."""

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(
            f"Unsupported language '{language}'. "
            f"Supported: {', '.join(sorted(TRANSLATIONS))}"
        )


@dataclass(frozen=True)
class Translations:
    """String table for one locale."""

    language_name: str
    initial_message: str
    context_loaded: Callable[[int], str]
    context_retained: Callable[[int], str]
    error_prefix: str
    clear_confirm_title: str
    clear_confirm_body: str
    clear_confirm_retain_button: str
    clear_confirm_discard_button: str
    cancel_button: str
    chat_cleared: str
    summarizing: str
    summary_title: str
    placeholder_enabled: str
    placeholder_disabled: str

    def as_dict(self, file_count: int = 0) -> dict[str, str]:
        """Render the table as plain strings (callables applied to file_count)."""
        rendered = {}
        for f in fields(self):
            value = getattr(self, f.name)
            rendered[f.name] = value(file_count) if callable(value) else value
        return rendered


TRANSLATIONS: dict[str, Translations] = {
    "en": Translations(
        language_name="English",
        initial_message=(
            "Hello! I am your Legal Remedy AI Agent. Please upload the relevant "
            "legal documents, and I will help you find resolutions based on "
            "their content."
        ),
        context_loaded=lambda n: (
            f"Context loaded from {n} file(s). You can now ask questions."
        ),
        context_retained=lambda n: (
            f"Document context from {n} file(s) is still loaded. "
            "You can continue asking questions."
        ),
        error_prefix="Error:",
        clear_confirm_title="Clear chat?",
        clear_confirm_body=(
            "This removes the conversation. Do you want to keep the uploaded "
            "documents as context?"
        ),
        clear_confirm_retain_button="Clear and keep documents",
        clear_confirm_discard_button="Clear everything",
        cancel_button="Cancel",
        chat_cleared="Chat cleared.",
        summarizing="Summarizing the conversation...",
        summary_title="Conversation summary:",
        placeholder_enabled="Ask a question about your documents...",
        placeholder_disabled="Please upload documents to begin",
    ),
    "es": Translations(
        language_name="Spanish",
        initial_message=(
            "¡Hola! Soy tu Agente de IA de Soluciones Legales. Sube los "
            "documentos legales pertinentes y te ayudaré a encontrar soluciones "
            "basadas en su contenido."
        ),
        context_loaded=lambda n: (
            f"Contexto cargado desde {n} archivo(s). Ya puedes hacer preguntas."
        ),
        context_retained=lambda n: (
            f"El contexto de {n} archivo(s) sigue cargado. "
            "Puedes seguir haciendo preguntas."
        ),
        error_prefix="Error:",
        clear_confirm_title="¿Borrar el chat?",
        clear_confirm_body=(
            "Esto elimina la conversación. ¿Quieres conservar los documentos "
            "subidos como contexto?"
        ),
        clear_confirm_retain_button="Borrar y conservar documentos",
        clear_confirm_discard_button="Borrar todo",
        cancel_button="Cancelar",
        chat_cleared="Chat borrado.",
        summarizing="Resumiendo la conversación...",
        summary_title="Resumen de la conversación:",
        placeholder_enabled="Haz una pregunta sobre tus documentos...",
        placeholder_disabled="Sube documentos para comenzar",
    ),
    "fr": Translations(
        language_name="French",
        initial_message=(
            "Bonjour ! Je suis votre Agent IA de Recours Juridiques. "
            "Téléversez les documents juridiques pertinents et je vous aiderai "
            "à trouver des solutions fondées sur leur contenu."
        ),
        context_loaded=lambda n: (
            f"Contexte chargé depuis {n} fichier(s). "
            "Vous pouvez maintenant poser des questions."
        ),
        context_retained=lambda n: (
            f"Le contexte de {n} fichier(s) est toujours chargé. "
            "Vous pouvez continuer à poser des questions."
        ),
        error_prefix="Erreur :",
        clear_confirm_title="Effacer la discussion ?",
        clear_confirm_body=(
            "Cela supprime la conversation. Voulez-vous conserver les documents "
            "téléversés comme contexte ?"
        ),
        clear_confirm_retain_button="Effacer et garder les documents",
        clear_confirm_discard_button="Tout effacer",
        cancel_button="Annuler",
        chat_cleared="Discussion effacée.",
        summarizing="Résumé de la conversation en cours...",
        summary_title="Résumé de la conversation :",
        placeholder_enabled="Posez une question sur vos documents...",
        placeholder_disabled="Téléversez des documents pour commencer",
    ),
}


def get_translations(
    language: str, table: Mapping[str, Translations] | None = None
) -> Translations:
    """Look up the string table for ``language``.

    Raises:
        UnsupportedLanguageError: If the locale is unknown.
    """
    table = TRANSLATIONS if table is None else table
    try:
        return table[language]
    except KeyError:
        raise UnsupportedLanguageError(language) from None


def supported_languages(table: Mapping[str, Translations] | None = None) -> list[str]:
    table = TRANSLATIONS if table is None else table
    return sorted(table)


def validate_translations(table: Mapping[str, Translations] | None = None) -> None:
    """Check every locale fills every field.

    String fields must be non-empty; callable fields must return non-empty
    text for a sample count.

    Raises:
        ValueError: Listing every missing or empty entry.
    """
    table = TRANSLATIONS if table is None else table
    if not table:
        raise ValueError("No translations configured")

    problems = []
    for language, translations in table.items():
        if not isinstance(translations, Translations):
            problems.append(f"{language}: not a Translations table")
            continue
        for f in fields(Translations):
            value = getattr(translations, f.name, None)
            if callable(value):
                try:
                    value = value(1)
                except Exception as e:
                    problems.append(f"{language}.{f.name}: raised {e!r}")
                    continue
            if not isinstance(value, str) or not value.strip():
                problems.append(f"{language}.{f.name}: empty")

    if problems:
        raise ValueError("Invalid translations: " + "; ".join(problems))

    logger.debug("Validated translations for %s", ", ".join(sorted(table)))
