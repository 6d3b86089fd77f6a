"""
Flask Extensions
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager for session-backed authentication
login_manager = LoginManager()
