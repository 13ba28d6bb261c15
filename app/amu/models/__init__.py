"""Data models for amu.

This module exports the core data structures used throughout the application.
"""

from amu.models.registry import Registry

__all__ = ["Registry"]
