"""
Seed an admin account. Admins cannot register through the web forms.

Usage:
  python -m before_you_sign.scripts.create_admin --username admin --email admin@beforeyousign.co.za

The password is read from ADMIN_PASSWORD or prompted for.
"""
import argparse
import getpass
import os
import sys

from before_you_sign.core.db import SessionLocal, init_db
from before_you_sign.services.accounts import DuplicateAccountError, create_admin


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create a Before You Sign admin account.")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    args = parser.parse_args(argv)

    password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty.")
        return 1

    init_db()
    db = SessionLocal()
    try:
        user = create_admin(db, args.username, args.email, password)
    except DuplicateAccountError as e:
        print(f"⚠️ {e.message}")
        return 1
    finally:
        db.close()

    print(f"✅ Admin '{user.username}' created (id={user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
