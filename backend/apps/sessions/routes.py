"""Session routes - registers session state and language endpoints."""

from fastapi import APIRouter

from apps.sessions.handlers import change_language, get_session_state, get_translations

router = APIRouter(prefix="/session", tags=["Session"])

# GET /session - Session snapshot
router.get("")(get_session_state)

# GET /session/translations - UI strings
router.get("/translations")(get_translations)

# PUT /session/language - Change language
router.put("/language")(change_language)
