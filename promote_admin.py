#!/usr/bin/env python
"""
Admin Promotion Script

Admins cannot self-register; this promotes an existing account to the admin role.

Usage:
    python promote_admin.py <email>

Or via Heroku:
    heroku run python promote_admin.py admin@example.com
"""

import sys
import os

from dotenv import load_dotenv

load_dotenv()

from jobboard import create_app, db  # noqa: E402
from jobboard.models.user import User  # noqa: E402


def promote_to_admin(email):
    """Promote a user to the admin role"""
    app = create_app(os.getenv('FLASK_ENV', 'production'))

    with app.app_context():
        user = User.query.filter_by(email=email.strip().lower()).first()

        if not user:
            print(f"Error: No user found with email: {email}")
            return False

        if user.role == 'admin':
            print(f"User {email} is already an admin")
            return True

        previous_role = user.role
        user.role = 'admin'
        user.status = 'active'
        db.session.commit()

        print(f"Promoted {email} from {previous_role} to admin.")
        print("Existing tokens for this user are now rejected; log in again to get an admin token.")
        return True


if __name__ == '__main__':
    if len(sys.argv) != 2:
        print("Usage: python promote_admin.py <email>")
        sys.exit(1)

    success = promote_to_admin(sys.argv[1])
    sys.exit(0 if success else 1)
