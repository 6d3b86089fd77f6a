"""
Access Control

Every request gets a ``Viewer`` describing who is asking, built once from
Flask-Login's ``current_user`` and kept on ``g``. Routes are gated with
``tier_required`` (or the three named gates below): anonymous callers are
sent to the login page, logged-in callers below the required tier get 403.
"""

from dataclasses import dataclass
from enum import IntEnum
from functools import wraps
from typing import Optional

from flask import g, redirect, request, url_for
from flask_login import current_user

from quotewall.errors import Forbidden
from quotewall.models import Role


class Tier(IntEnum):
    """Privilege tiers, ordered so that a higher tier includes the lower ones."""
    ANONYMOUS = 0
    USER = 1
    EDITOR = 2
    ADMIN = 3

    @classmethod
    def for_role(cls, role):
        if role is None:
            return cls.ANONYMOUS
        try:
            return cls[Role(role).name]
        except ValueError:
            # Unknown stored role: treat as the lowest logged-in tier
            return cls.USER

    def at_least(self, tier):
        return self >= tier


@dataclass(frozen=True)
class Viewer:
    """The caller of the current request."""
    user_id: Optional[int] = None
    username: Optional[str] = None
    tier: Tier = Tier.ANONYMOUS

    @property
    def is_anonymous(self):
        return self.tier is Tier.ANONYMOUS

    def at_least(self, tier):
        return self.tier.at_least(tier)


ANONYMOUS = Viewer()


def load_viewer():
    """Build the ``Viewer`` for the logged-in user (or ``ANONYMOUS``)."""
    if not current_user.is_authenticated:
        return ANONYMOUS
    return Viewer(
        user_id=current_user.id,
        username=current_user.username,
        tier=Tier.for_role(current_user.role),
    )


def current_viewer():
    viewer = g.get('viewer')
    if viewer is None:
        viewer = g.viewer = load_viewer()
    return viewer


def tier_required(tier):
    """Decorator factory gating a view on the caller's tier."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            viewer = current_viewer()
            if viewer.is_anonymous:
                return redirect(url_for('auth.login', next=request.full_path.rstrip('?')))
            if not viewer.at_least(tier):
                raise Forbidden()
            return f(*args, **kwargs)
        return wrapper
    return decorator


require_login = tier_required(Tier.USER)
require_editor_or_admin = tier_required(Tier.EDITOR)
require_admin = tier_required(Tier.ADMIN)
