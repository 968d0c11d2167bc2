"""General utility functions for Forkpoint."""

from __future__ import annotations

from .logging import setup_logging

__all__ = ["setup_logging"]
