"""Sessions module - browser session state and language."""
