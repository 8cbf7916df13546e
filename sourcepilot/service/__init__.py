"""HTTP service exposing click resolution to browser hosts."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
