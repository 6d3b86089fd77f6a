from datetime import datetime, timedelta

import pytest

from quotewall.errors import MalformedQuote, QuoteNotFound
from quotewall.extensions import db
from quotewall.models import Like, Quote
from quotewall.quotes import services

T0 = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture()
def three_quotes(make_quote):
    return [
        make_quote('Alice: first', created_at=T0),
        make_quote('Bob: second', created_at=T0 + timedelta(minutes=1)),
        make_quote('Carol: third\nAlice: again', created_at=T0 + timedelta(minutes=2)),
    ]


def _ids(feed):
    return [item.quote.id for item in feed]


def test_list_newest_first_by_default(app, three_quotes):
    with app.app_context():
        assert _ids(services.list_quotes()) == list(reversed(three_quotes))
        assert _ids(services.list_quotes(sort='newest')) == list(reversed(three_quotes))


def test_list_oldest_first(app, three_quotes):
    with app.app_context():
        assert _ids(services.list_quotes(sort='oldest')) == three_quotes


def test_unknown_sort_falls_back_to_newest(app, three_quotes):
    with app.app_context():
        assert _ids(services.list_quotes(sort='sideways')) == list(reversed(three_quotes))


def test_equal_timestamps_keep_insertion_order(app, make_quote):
    a = make_quote('A: 1', created_at=T0)
    b = make_quote('B: 2', created_at=T0)
    with app.app_context():
        assert _ids(services.list_quotes(sort='oldest')) == [a, b]
        assert _ids(services.list_quotes(sort='newest')) == [b, a]


def test_search_filters_by_speaker(app, three_quotes):
    first, second, third = three_quotes
    with app.app_context():
        assert _ids(services.list_quotes(sort='oldest', search_name='ali')) == [first, third]
        assert _ids(services.list_quotes(search_name='BOB')) == [second]
        assert _ids(services.list_quotes(search_name='nobody')) == []
        assert len(services.list_quotes(search_name='')) == 3


def test_like_counts_and_viewer_flag(app, make_user, three_quotes):
    u1 = make_user('u1', 'u1@example.com')
    u2 = make_user('u2', 'u2@example.com')
    first, second, _ = three_quotes
    with app.app_context():
        services.toggle_like(first, u1)
        services.toggle_like(first, u2)
        services.toggle_like(second, u2)

        feed = {item.quote.id: item for item in services.list_quotes(viewer_id=u1)}
        assert feed[first].like_count == 2
        assert feed[second].like_count == 1
        assert feed[three_quotes[2]].like_count == 0
        assert feed[first].liked
        assert not feed[second].liked


def test_toggle_like_flips_state(app, make_user, make_quote):
    uid = make_user('u', 'u@example.com')
    qid = make_quote('Alice: hi')
    with app.app_context():
        assert services.toggle_like(qid, uid) is True
        assert Like.query.filter_by(user_id=uid, quote_id=qid).count() == 1
        assert services.toggle_like(qid, uid) is False
        assert Like.query.filter_by(user_id=uid, quote_id=qid).count() == 0
        services.toggle_like(qid, uid)
        services.toggle_like(qid, uid)
        services.toggle_like(qid, uid)
        assert Like.query.filter_by(user_id=uid, quote_id=qid).count() == 1


def test_toggle_like_missing_quote(app, make_user):
    uid = make_user('u', 'u@example.com')
    with app.app_context():
        with pytest.raises(QuoteNotFound):
            services.toggle_like(999, uid)


def test_quote_lifecycle(app, make_user):
    uid = make_user('ed', 'ed@example.com', role='editor')
    with app.app_context():
        quote = services.create_quote(['Alice', 'Bob'], ['hi', 'hey'], author_id=uid)
        qid = quote.id
        assert db.session.get(Quote, qid).quote == 'Alice: hi\nBob: hey'
        assert db.session.get(Quote, qid).created_by == uid

        services.update_quote(qid, ['Carol'], ['bye'])
        assert db.session.get(Quote, qid).quote == 'Carol: bye'

        services.toggle_like(qid, uid)
        services.delete_quote(qid)
        assert db.session.get(Quote, qid) is None
        assert Like.query.filter_by(quote_id=qid).count() == 0

        with pytest.raises(QuoteNotFound):
            services.delete_quote(qid)


def test_update_with_mismatched_arrays_keeps_body(app, make_quote):
    qid = make_quote('Alice: hi')
    with app.app_context():
        with pytest.raises(MalformedQuote):
            services.update_quote(qid, ['A', 'B'], ['only one'])
        db.session.rollback()
        assert db.session.get(Quote, qid).quote == 'Alice: hi'


def test_feed_page_renders_quotes(client, make_user, login, make_quote):
    make_user('u', 'u@example.com')
    make_quote('Alice: hello there', created_at=T0)
    make_quote('Bob: general kenobi', created_at=T0 + timedelta(minutes=1))
    login('u@example.com')

    body = client.get('/').get_data(as_text=True)
    assert 'hello there' in body
    assert 'general kenobi' in body
    assert body.index('general kenobi') < body.index('hello there')

    body = client.get('/?sort=oldest').get_data(as_text=True)
    assert body.index('hello there') < body.index('general kenobi')

    body = client.get('/?search=bob').get_data(as_text=True)
    assert 'general kenobi' in body
    assert 'hello there' not in body


def test_like_route_toggles(client, app, make_user, make_quote, login):
    uid = make_user('u', 'u@example.com')
    qid = make_quote('Alice: hi')
    login('u@example.com')

    r = client.post(f'/like/{qid}', data={'sort': 'oldest'})
    assert r.status_code in (301, 302)
    assert 'sort=oldest' in r.headers['Location']
    with app.app_context():
        assert Like.query.filter_by(user_id=uid, quote_id=qid).count() == 1

    client.post(f'/like/{qid}')
    with app.app_context():
        assert Like.query.filter_by(user_id=uid, quote_id=qid).count() == 0

    assert client.post('/like/999').status_code == 404


def test_add_route_composes_quote(client, app, make_user, login):
    make_user('ed', 'ed@example.com', role='editor')
    login('ed@example.com')

    r = client.post('/add', data={'names': ['Alice', 'Bob', ''], 'quotes': ['hi', 'hey', '']})
    assert r.status_code in (301, 302)
    with app.app_context():
        assert Quote.query.one().quote == 'Alice: hi\nBob: hey'


def test_add_route_rejects_mismatched_arrays(client, app, make_user, login):
    make_user('ed', 'ed@example.com', role='editor')
    login('ed@example.com')

    r = client.post('/add', data={'names': ['Alice', 'Bob'], 'quotes': ['hi']})
    assert r.status_code == 400
    with app.app_context():
        assert Quote.query.count() == 0


def test_edit_route_prefills_and_replaces(client, app, make_user, make_quote, login):
    make_user('root', 'root@example.com', role='admin')
    qid = make_quote('Alice: it is 10:30\nnarration')
    login('root@example.com')

    body = client.get(f'/edit/{qid}').get_data(as_text=True)
    assert 'value="Alice"' in body
    assert 'value="it is 10:30"' in body
    assert 'value="narration"' in body

    r = client.post(f'/edit/{qid}', data={'names': ['Zed'], 'quotes': ['new words']})
    assert r.status_code in (301, 302)
    with app.app_context():
        assert db.session.get(Quote, qid).quote == 'Zed: new words'

    assert client.get('/edit/999').status_code == 404


def test_store_error_returns_500_and_is_logged_once(client, app, make_user, login, caplog, monkeypatch):
    import logging
    from sqlalchemy.exc import OperationalError
    from sqlalchemy.orm import Session

    make_user('ed', 'ed@example.com', role='editor')
    login('ed@example.com')

    real_commit = Session.commit
    calls = []

    def failing_once(self):
        calls.append(1)
        if len(calls) == 1:
            raise OperationalError('INSERT', {}, Exception('database is gone'))
        return real_commit(self)

    monkeypatch.setattr(Session, 'commit', failing_once)
    with caplog.at_level(logging.ERROR):
        r = client.post('/add', data={'names': ['Alice'], 'quotes': ['hi']})

    assert r.status_code == 500
    errors = [rec for rec in caplog.records if rec.levelno >= logging.ERROR]
    assert len(errors) == 1
    with app.app_context():
        assert Quote.query.count() == 0
