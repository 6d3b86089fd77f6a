"""
Admin Blueprint

User management, available to the admin tier only.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from quotewall.admin import routes  # noqa: E402, F401
