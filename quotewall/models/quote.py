"""
Quote and Like Models
"""

from quotewall.extensions import db


class Quote(db.Model):
    """A quote body of one or more ``speaker: utterance`` lines"""
    __tablename__ = 'quotes'

    id = db.Column(db.Integer, primary_key=True)
    quote = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp(), index=True)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'))

    likes = db.relationship('Like', backref='quote', lazy=True, cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Quote {self.id}>'


class Like(db.Model):
    """One user's like of one quote"""
    __tablename__ = 'likes'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'quote_id', name='uq_likes_user_quote'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'),
                        nullable=False, index=True)
    quote_id = db.Column(db.Integer, db.ForeignKey('quotes.id', ondelete='CASCADE'),
                         nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    def __repr__(self):
        return f'<Like user:{self.user_id} quote:{self.quote_id}>'
