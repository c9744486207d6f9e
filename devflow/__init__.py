"""DevFlow API: project tracking with JWT authentication and ownership checks."""

__version__ = "0.1.0"
