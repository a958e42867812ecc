"""
Create an enabled user (e.g. the first admin). Run from project root:
  python -m book_network.scripts.create_user EMAIL PASSWORD [ROLE ...]
Example:
  python -m book_network.scripts.create_user admin@example.com your-secure-password ADMIN USER
"""
import argparse
import logging
import sys

from pydantic import EmailStr, TypeAdapter, ValidationError

from book_network.core.config import get_settings
from book_network.core.database import SessionLocal
from book_network.core.exceptions import DuplicateEmailError
from book_network.core.logging import configure_logging
from book_network.core.security import (
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    PasswordHasher,
)
from book_network.repositories import RoleRepository, UserRepository

logger = logging.getLogger(__name__)

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an activated Book Network user.")
    parser.add_argument("email", help="Email address (login identifier)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("roles", nargs="*", help="Role names to grant (default: DEFAULT_ROLE)")
    parser.add_argument("--firstname", default="")
    parser.add_argument("--lastname", default="")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    # Same normalization as the EmailStr fields of the auth routes, so the login matches.
    try:
        email = _EMAIL_ADAPTER.validate_python(args.email.strip())
    except ValidationError:
        print("Invalid email.", file=sys.stderr)
        return 1
    if len(email) > EMAIL_MAX_LEN:
        print("Invalid email.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    role_names = args.roles or [settings.DEFAULT_ROLE]
    db = SessionLocal()
    try:
        role_repo = RoleRepository(db)
        roles = []
        for name in role_names:
            role = role_repo.get_by_name(name)
            if role is None:
                print(f"Role '{name}' does not exist; create it with create_role.", file=sys.stderr)
                return 1
            roles.append(role)
        hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
        try:
            user = UserRepository(db).create(
                email=email,
                password_hash=hasher.hash(args.password),
                firstname=args.firstname,
                lastname=args.lastname,
                enabled=True,
                roles=roles,
            )
        except DuplicateEmailError:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        db.commit()
        logger.info("Created user_id=%s with roles=%s", user.id, ",".join(role_names))
        print(f"Created user '{email}' with roles {', '.join(role_names)}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
