"""
Create a user (e.g. first admin). Run from project root:
  python -m devflow.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m devflow.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from devflow.core.config import get_settings
from devflow.core.database import SessionLocal
from devflow.core.exceptions import ConflictError, ValidationError
from devflow.core.security import BcryptPasswordHasher
from devflow.models.user import UserRole
from devflow.repositories.users import SqlAlchemyCredentialStore
from devflow.services.auth import AuthService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a DevFlow user from the command line.")
    parser.add_argument("username", help="Username (1-50 chars, unique)")
    parser.add_argument("email", help="Email (1-100 chars, unique)")
    parser.add_argument("password", help="Password (at least 6 chars)")
    parser.add_argument(
        "role", nargs="?", default=UserRole.USER.value, choices=[r.value for r in UserRole]
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    db = SessionLocal()
    try:
        service = AuthService(
            SqlAlchemyCredentialStore(db),
            BcryptPasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        )
        try:
            user = service.register(
                args.username, args.email, args.password, role=UserRole(args.role)
            )
        except (ConflictError, ValidationError) as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created user '{user.username}' (id={user.id}) with role '{user.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
