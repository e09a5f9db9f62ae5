"""REST API presentation layer for Vigil.

This package provides a FastAPI-based REST API over the vigil_identity
authentication flows and role administration.

Structure:
    api/
    ├── app.py                # FastAPI application factory
    ├── config.py             # API configuration
    ├── dependencies.py       # Dependency injection
    ├── exception_handlers.py # Exception to HTTP response mapping
    ├── routers/              # API route handlers
    └── schemas/              # Pydantic request/response schemas
"""

from vigil.presentation.api.app import create_app

__all__ = ["create_app"]
