"""Promote an account to admin, creating it when a password is given.

Usage: python scripts/make_admin.py EMAIL [PASSWORD] [USERNAME]
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from werkzeug.security import generate_password_hash

from quotewall import create_app
from quotewall.extensions import db
from quotewall.models import User, Role


def make_admin(email, password=None, username=None):
    user = User.query.filter_by(email=email).first()

    if not user:
        if not password:
            print(f"No user with email {email}; pass a password to create one")
            return 1
        user = User(
            username=username or email.split('@')[0],
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.ADMIN.value,
        )
        db.session.add(user)
        print("New admin user created")
    else:
        user.role = Role.ADMIN.value
        print("Existing user promoted to admin")

    db.session.commit()
    return 0


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)
    app = create_app()
    with app.app_context():
        sys.exit(make_admin(*sys.argv[1:4]))
