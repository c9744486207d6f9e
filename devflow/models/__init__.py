"""SQLAlchemy ORM models."""

from devflow.models.base import Base
from devflow.models.project import Project
from devflow.models.user import User, UserRole

__all__ = ["Base", "Project", "User", "UserRole"]
