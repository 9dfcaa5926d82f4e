"""
Core utilities shared across the application.
"""

from .logger import setup_logging

__all__ = ["setup_logging"]
