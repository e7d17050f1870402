"""Middleware package."""

from crew_api.middleware.error_handler import (
    crew_api_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "crew_api_exception_handler",
    "generic_exception_handler",
    "http_exception_handler",
    "sqlalchemy_exception_handler",
    "validation_exception_handler",
]
