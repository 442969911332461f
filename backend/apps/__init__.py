"""API applications, one package per domain."""
