"""Core app configuration, security primitives and errors."""

from devflow.core.config import get_settings, settings

__all__ = ["get_settings", "settings"]
