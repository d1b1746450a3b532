# src/gamehub/middleware/__init__.py

"""Middleware components for the GameHub API."""

from .logging import RequestLoggingMiddleware, configure_logging

__all__ = ["RequestLoggingMiddleware", "configure_logging"]
