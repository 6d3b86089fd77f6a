"""
Session Model
"""

from quotewall.extensions import db


class StoredSession(db.Model):
    """Server-side session data, keyed by the id held in the session cookie"""
    __tablename__ = 'sessions'

    sid = db.Column(db.String(255), primary_key=True)
    sess = db.Column(db.Text, nullable=False)
    expire = db.Column(db.DateTime, nullable=False, index=True)

    def __repr__(self):
        return f'<StoredSession expires:{self.expire}>'
