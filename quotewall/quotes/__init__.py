"""
Quotes Blueprint

The quote feed and the add/edit/delete/like routes.
"""

from flask import Blueprint

quotes_bp = Blueprint('quotes', __name__)

from quotewall.quotes import routes  # noqa: E402, F401
