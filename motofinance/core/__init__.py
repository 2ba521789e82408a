"""
Core utilities and configuration for MotoFinance.

This package provides core functionality including logging configuration,
domain models, database setup, and other shared utilities.
"""

from motofinance.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
