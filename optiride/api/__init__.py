"""HTTP API - FastAPI application exposing the comparison pipeline."""

from .app import create_app

__all__ = ["create_app"]
