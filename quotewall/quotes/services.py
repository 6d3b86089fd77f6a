"""
Quote Services

The quote feed (listing with like counts, sorting and speaker search),
the like toggle, and the add/edit/delete lifecycle of a quote.
"""

import logging
from collections import namedtuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from quotewall.errors import QuoteNotFound, StoreError
from quotewall.extensions import db
from quotewall.models import Quote, Like
from quotewall.quotes.text import compose, parse, matches_speaker

logger = logging.getLogger(__name__)

SORT_ORDERS = ('newest', 'oldest')
DEFAULT_SORT = 'newest'

FeedItem = namedtuple('FeedItem', ['quote', 'like_count', 'liked', 'lines'])


def normalize_sort(sort):
    return sort if sort in SORT_ORDERS else DEFAULT_SORT


def _commit(action):
    """Commit the session, rolling back and wrapping store failures."""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Store error while %s', action)
        raise StoreError() from e


def list_quotes(sort=DEFAULT_SORT, search_name='', viewer_id=None):
    """Return the feed as ``FeedItem`` tuples.

    Quotes are ordered by creation time (``newest`` first by default,
    ``oldest`` first on request). Quotes created in the same instant keep
    insertion order, i.e. they are tie-broken by id in the same direction.
    A non-empty ``search_name`` keeps only quotes with a matching speaker.
    """
    sort = normalize_sort(sort)
    like_count = func.count(Like.id).label('like_count')
    query = (
        db.session.query(Quote, like_count)
        .outerjoin(Like, Like.quote_id == Quote.id)
        .group_by(Quote.id)
    )
    if sort == 'oldest':
        query = query.order_by(Quote.created_at.asc(), Quote.id.asc())
    else:
        query = query.order_by(Quote.created_at.desc(), Quote.id.desc())

    liked_ids = set()
    if viewer_id is not None:
        liked_ids = {
            quote_id for (quote_id,) in
            db.session.query(Like.quote_id).filter(Like.user_id == viewer_id)
        }

    feed = []
    for quote, count in query.all():
        if search_name and not matches_speaker(quote.quote, search_name):
            continue
        feed.append(FeedItem(quote, count, quote.id in liked_ids, parse(quote.quote)))
    return feed


def get_quote(quote_id):
    quote = db.session.get(Quote, quote_id)
    if quote is None:
        raise QuoteNotFound()
    return quote


def toggle_like(quote_id, user_id):
    """Flip the user's like on a quote and return the new state (True = liked)."""
    get_quote(quote_id)

    existing = Like.query.filter_by(user_id=user_id, quote_id=quote_id).first()
    if existing is not None:
        db.session.delete(existing)
        _commit('removing a like')
        return False

    db.session.add(Like(user_id=user_id, quote_id=quote_id))
    try:
        db.session.commit()
    except IntegrityError:
        # A concurrent request inserted the same like first
        db.session.rollback()
        logger.info('Duplicate like ignored for user %s on quote %s', user_id, quote_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Store error while adding a like')
        raise StoreError() from e
    return True


def create_quote(names, utterances, author_id=None):
    """Compose a new quote from the form arrays and store it."""
    quote = Quote(quote=compose(names, utterances), created_by=author_id)
    db.session.add(quote)
    _commit('adding a quote')
    logger.info('Quote %s added by user %s', quote.id, author_id)
    return quote


def update_quote(quote_id, names, utterances):
    """Replace the whole body of an existing quote."""
    quote = get_quote(quote_id)
    quote.quote = compose(names, utterances)
    _commit('editing a quote')
    logger.info('Quote %s edited', quote_id)
    return quote


def delete_quote(quote_id):
    quote = get_quote(quote_id)
    db.session.delete(quote)
    _commit('deleting a quote')
    logger.info('Quote %s deleted', quote_id)
