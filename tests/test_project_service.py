"""Unit tests for devflow.services.projects: validation, limits and owner-only access."""

import unittest

from devflow.core.exceptions import NotFoundError, ValidationError
from devflow.models.user import User
from devflow.repositories.projects import InMemoryProjectStore
from devflow.repositories.users import InMemoryCredentialStore
from devflow.schemas.project import ProjectCreate, ProjectUpdate
from devflow.services.authorization import OwnershipGuard
from devflow.services.projects import ProjectService


def _user(store: InMemoryCredentialStore, username: str) -> User:
    return store.add(
        User(
            username=username,
            email=f"{username}@x.com",
            password_hash="not-used",
            role="user",
        )
    )


class ProjectServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.users = InMemoryCredentialStore()
        self.projects = InMemoryProjectStore()
        self.service = ProjectService(
            self.projects, self.users, OwnershipGuard(), max_projects_per_user=3
        )
        self.alice = _user(self.users, "alice")
        self.bob = _user(self.users, "bob")


class TestCreateProject(ProjectServiceTestCase):
    """create_project() makes the caller the owner and validates fields."""

    def test_caller_becomes_owner(self) -> None:
        project = self.service.create_project(
            ProjectCreate(name="  DevFlow  ", description=" API ", tags=["backend", " api "]),
            self.alice.id,
        )
        self.assertEqual(project.owner_id, self.alice.id)
        self.assertEqual(project.owner_username, "alice")
        self.assertEqual(project.name, "DevFlow")
        self.assertEqual(project.description, "API")
        self.assertEqual(project.tags, ["backend", "api"])
        self.assertIsNone(project.updated_at)

    def test_optional_fields_default_to_empty(self) -> None:
        project = self.service.create_project(ProjectCreate(name="Bare"), self.alice.id)
        self.assertEqual(project.description, "")
        self.assertEqual(project.tags, [])

    def test_name_rules(self) -> None:
        for name in ("", "   ", "x" * 201):
            with self.assertRaises(ValidationError):
                self.service.create_project(ProjectCreate(name=name), self.alice.id)
        self.service.create_project(ProjectCreate(name="x" * 200), self.alice.id)

    def test_description_limit(self) -> None:
        with self.assertRaises(ValidationError):
            self.service.create_project(
                ProjectCreate(name="P", description="d" * 1001), self.alice.id
            )

    def test_unknown_owner(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_project(ProjectCreate(name="P"), 999)
        self.assertEqual(ctx.exception.message, "User not found")

    def test_per_user_limit(self) -> None:
        for i in range(3):
            self.service.create_project(ProjectCreate(name=f"P{i}"), self.alice.id)
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_project(ProjectCreate(name="P3"), self.alice.id)
        self.assertEqual(ctx.exception.message, "Maximum 3 projects per user")
        # The limit is per owner.
        self.service.create_project(ProjectCreate(name="B0"), self.bob.id)


class TestOwnerOnlyAccess(ProjectServiceTestCase):
    """A non-owner sees exactly what a caller sees for a missing project."""

    def setUp(self) -> None:
        super().setUp()
        self.project = self.service.create_project(
            ProjectCreate(name="Alice's", tags=["a"]), self.alice.id
        )

    def _not_found_message(self, fn, *args) -> str:
        with self.assertRaises(NotFoundError) as ctx:
            fn(*args)
        return ctx.exception.message

    def test_owner_can_read(self) -> None:
        got = self.service.get_project(self.project.id, self.alice.id)
        self.assertEqual(got.name, "Alice's")

    def test_read_by_other_looks_missing(self) -> None:
        denied = self._not_found_message(self.service.get_project, self.project.id, self.bob.id)
        missing = self._not_found_message(self.service.get_project, 12345, self.bob.id)
        self.assertEqual(denied, missing)

    def test_owner_can_update(self) -> None:
        updated = self.service.update_project(
            self.project.id, ProjectUpdate(name="Renamed", tags=["b"]), self.alice.id
        )
        self.assertEqual(updated.name, "Renamed")
        self.assertEqual(updated.tags, ["b"])
        self.assertEqual(updated.owner_id, self.alice.id)
        self.assertIsNotNone(updated.updated_at)

    def test_update_by_other_looks_missing_and_changes_nothing(self) -> None:
        denied = self._not_found_message(
            self.service.update_project, self.project.id, ProjectUpdate(name="Hijacked"), self.bob.id
        )
        missing = self._not_found_message(
            self.service.update_project, 12345, ProjectUpdate(name="Hijacked"), self.bob.id
        )
        self.assertEqual(denied, missing)
        self.assertEqual(self.projects.get_by_id(self.project.id).name, "Alice's")

    def test_update_by_other_with_invalid_body_still_looks_missing(self) -> None:
        with self.assertRaises(NotFoundError):
            self.service.update_project(self.project.id, ProjectUpdate(name=""), self.bob.id)

    def test_update_validates_fields(self) -> None:
        with self.assertRaises(ValidationError):
            self.service.update_project(self.project.id, ProjectUpdate(name=" "), self.alice.id)

    def test_delete_by_other_looks_missing_and_keeps_project(self) -> None:
        denied = self._not_found_message(self.service.delete_project, self.project.id, self.bob.id)
        missing = self._not_found_message(self.service.delete_project, 12345, self.bob.id)
        self.assertEqual(denied, missing)
        self.assertIsNotNone(self.projects.get_by_id(self.project.id))

    def test_owner_can_delete(self) -> None:
        self.service.delete_project(self.project.id, self.alice.id)
        self.assertIsNone(self.projects.get_by_id(self.project.id))
        with self.assertRaises(NotFoundError):
            self.service.get_project(self.project.id, self.alice.id)


class TestListProjects(ProjectServiceTestCase):
    """list_projects() returns only the caller's projects, newest first."""

    def test_only_own_projects_newest_first(self) -> None:
        first = self.service.create_project(ProjectCreate(name="first"), self.alice.id)
        self.service.create_project(ProjectCreate(name="bob's"), self.bob.id)
        second = self.service.create_project(ProjectCreate(name="second"), self.alice.id)

        listed = self.service.list_projects(self.alice.id)
        self.assertEqual([p.id for p in listed], [second.id, first.id])
        self.assertEqual(self.service.list_projects(999), [])


if __name__ == "__main__":
    unittest.main()
