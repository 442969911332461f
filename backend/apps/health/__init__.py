"""Health module - service status."""
