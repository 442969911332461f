"""Documents module - uploading documents into the session context."""
