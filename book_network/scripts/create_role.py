"""
Create a role. Registration needs DEFAULT_ROLE (USER) to exist. Run from project root:
  python -m book_network.scripts.create_role NAME [NAME ...]
Example:
  python -m book_network.scripts.create_role USER ADMIN
"""
import argparse
import sys

from book_network.core.database import SessionLocal
from book_network.core.exceptions import DuplicateRoleNameError
from book_network.core.logging import configure_logging
from book_network.repositories import RoleRepository


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create Book Network roles.")
    parser.add_argument("names", nargs="+", help="Role names, e.g. USER ADMIN")
    args = parser.parse_args(argv)
    configure_logging()

    db = SessionLocal()
    try:
        status = 0
        for raw in args.names:
            name = raw.strip()
            if not name or len(name) > 64:
                print(f"Invalid role name '{raw}'.", file=sys.stderr)
                status = 1
                continue
            try:
                RoleRepository(db).create(name)
            except DuplicateRoleNameError:
                print(f"Role '{name}' already exists.", file=sys.stderr)
                status = 1
                continue
            db.commit()
            print(f"Created role '{name}'.")
        return status
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
