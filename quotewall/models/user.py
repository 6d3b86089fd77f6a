"""
User Model
"""

from enum import Enum

from flask_login import UserMixin

from quotewall.extensions import db


class Role(str, Enum):
    """Stored role of an account."""
    USER = 'user'
    EDITOR = 'editor'
    ADMIN = 'admin'

    @classmethod
    def values(cls):
        return [r.value for r in cls]


class User(UserMixin, db.Model):
    """Registered account"""
    __tablename__ = 'users'
    __table_args__ = (
        db.CheckConstraint(
            "role IN ('user', 'editor', 'admin')", name='ck_users_role'
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column('password', db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=Role.USER.value,
                     server_default=Role.USER.value)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    likes = db.relationship('Like', backref='user', lazy=True, cascade='all, delete-orphan')
    # No delete cascade: removing a user nulls quotes.created_by
    quotes = db.relationship('Quote', backref='author', lazy=True)

    def session_payload(self):
        """What the session keeps about the logged-in user."""
        return {'id': self.id, 'username': self.username, 'role': self.role}

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
