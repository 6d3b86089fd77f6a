"""
Server-side Sessions

The session cookie only carries a random session id; the session data
lives in the ``sessions`` table with an expiry time. Clearing a session
deletes its row, so a copy of the old cookie no longer identifies anyone.
"""

import logging
import secrets
from datetime import datetime, timezone

from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

from quotewall.extensions import db
from quotewall.models import StoredSession

logger = logging.getLogger(__name__)


def _utcnow():
    # Naive UTC, matching the DateTime columns
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ServerSideSession(CallbackDict, SessionMixin):
    """Session dict that remembers its id and whether it changed."""

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True
        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.stale_sids = []

    def regenerate(self):
        """Move the session to a fresh id; the old row is dropped on save."""
        if not self.new:
            self.stale_sids.append(self.sid)
        self.sid = DatabaseSessionInterface.generate_sid()
        self.new = True
        self.modified = True


class DatabaseSessionInterface(SessionInterface):
    """Keeps session data in the ``sessions`` table."""

    serializer = TaggedJSONSerializer()
    session_class = ServerSideSession

    @staticmethod
    def generate_sid():
        return secrets.token_urlsafe(32)

    def open_session(self, app, request):
        sid = request.cookies.get(self.get_cookie_name(app))
        if sid:
            record = db.session.get(StoredSession, sid)
            if record is not None and record.expire > _utcnow():
                return self.session_class(self.serializer.loads(record.sess), sid=sid)
            if record is not None:
                logger.debug('Dropping expired session')
                db.session.delete(record)
                db.session.commit()
        return self.session_class(sid=self.generate_sid(), new=True)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        for stale in session.stale_sids:
            StoredSession.query.filter_by(sid=stale).delete()
        session.stale_sids = []

        if not session:
            if session.modified:
                StoredSession.query.filter_by(sid=session.sid).delete()
                response.delete_cookie(name, domain=domain, path=path)
            db.session.commit()
            return

        if self.should_set_cookie(app, session):
            record = db.session.get(StoredSession, session.sid)
            if record is None:
                record = StoredSession(sid=session.sid)
                db.session.add(record)
            record.sess = self.serializer.dumps(dict(session))
            record.expire = _utcnow() + app.permanent_session_lifetime
            response.set_cookie(
                name,
                session.sid,
                expires=self.get_expiration_time(app, session),
                httponly=self.get_cookie_httponly(app),
                domain=domain,
                path=path,
                secure=self.get_cookie_secure(app),
                samesite=self.get_cookie_samesite(app),
            )
        db.session.commit()
