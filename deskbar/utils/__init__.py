# Deskbar Utilities Package
"""
Shared utility functions and helpers for the deskbar menu.
"""

from .helpers import launch_app, load_settings, sanitize_exec

__all__ = ["launch_app", "load_settings", "sanitize_exec"]
