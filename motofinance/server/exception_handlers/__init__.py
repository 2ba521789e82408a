"""
Exception handlers for the MotoFinance server.

This package maps domain errors to HTTP responses and provides a setup
function to register every handler with the FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
