"""Project persistence keyed by id and owner."""

import itertools
import threading
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy.orm import Session

from devflow.models.project import Project


class ProjectStore(Protocol):
    def get_by_id(self, project_id: int) -> Project | None: ...

    def list_by_owner(self, owner_id: int) -> list[Project]:
        """Owner's projects, newest first."""
        ...

    def count_by_owner(self, owner_id: int) -> int: ...

    def add(self, project: Project) -> Project: ...

    def update(self, project: Project) -> Project: ...

    def delete(self, project_id: int) -> None: ...


class SqlAlchemyProjectStore:
    """ProjectStore backed by the projects table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, project_id: int) -> Project | None:
        return self.db.query(Project).filter(Project.id == project_id).first()

    def list_by_owner(self, owner_id: int) -> list[Project]:
        return (
            self.db.query(Project)
            .filter(Project.owner_id == owner_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )

    def count_by_owner(self, owner_id: int) -> int:
        return self.db.query(Project).filter(Project.owner_id == owner_id).count()

    def add(self, project: Project) -> Project:
        project.created_at = datetime.now(UTC)
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        return project

    def update(self, project: Project) -> Project:
        project.updated_at = datetime.now(UTC)
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        return project

    def delete(self, project_id: int) -> None:
        self.db.query(Project).filter(Project.id == project_id).delete(
            synchronize_session=False
        )
        self.db.commit()


class InMemoryProjectStore:
    """Process-local ProjectStore for tests and local tooling."""

    def __init__(self) -> None:
        self._projects: dict[int, Project] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get_by_id(self, project_id: int) -> Project | None:
        return self._projects.get(project_id)

    def list_by_owner(self, owner_id: int) -> list[Project]:
        owned = [p for p in self._projects.values() if p.owner_id == owner_id]
        return sorted(owned, key=lambda p: (p.created_at, p.id), reverse=True)

    def count_by_owner(self, owner_id: int) -> int:
        return sum(1 for p in self._projects.values() if p.owner_id == owner_id)

    def add(self, project: Project) -> Project:
        with self._lock:
            project.id = next(self._ids)
            project.created_at = datetime.now(UTC)
            self._projects[project.id] = project
        return project

    def update(self, project: Project) -> Project:
        project.updated_at = datetime.now(UTC)
        self._projects[project.id] = project
        return project

    def delete(self, project_id: int) -> None:
        self._projects.pop(project_id, None)
