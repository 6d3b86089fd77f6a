"""
Models Package

Exports all models for easy importing.
"""

from quotewall.models.user import User, Role
from quotewall.models.quote import Quote, Like
from quotewall.models.session import StoredSession

__all__ = ['User', 'Role', 'Quote', 'Like', 'StoredSession']
