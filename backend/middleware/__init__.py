"""Middleware package for FastAPI application."""

from middleware.rate_limit import RateLimitConfig, RateLimitMiddleware

__all__ = ["RateLimitMiddleware", "RateLimitConfig"]
