"""
Quote Routes
"""

from flask import render_template, request, redirect, url_for, flash

from quotewall.auth.access import (
    Tier, current_viewer, require_login, require_editor_or_admin, require_admin,
)
from quotewall.errors import MalformedQuote
from quotewall.quotes import quotes_bp, services
from quotewall.quotes.text import form_rows

BLANK_ROWS = [('', ''), ('', '')]


def _feed_url():
    """Back to the feed, keeping the listing the form was posted from."""
    params = {}
    if request.form.get('sort'):
        params['sort'] = request.form['sort']
    if request.form.get('search'):
        params['search'] = request.form['search']
    return url_for('quotes.index', **params)


@quotes_bp.route('/')
@require_login
def index():
    """Quote feed with optional speaker search and sort order"""
    viewer = current_viewer()
    sort = services.normalize_sort(request.args.get('sort'))
    search = request.args.get('search', '').strip()
    feed = services.list_quotes(sort=sort, search_name=search, viewer_id=viewer.user_id)
    return render_template('quotes/index.html',
                           feed=feed,
                           sort=sort,
                           search=search,
                           viewer=viewer,
                           can_add=viewer.at_least(Tier.EDITOR),
                           can_edit=viewer.at_least(Tier.ADMIN))


@quotes_bp.route('/like/<int:quote_id>', methods=['POST'])
@require_login
def like(quote_id):
    """Toggle the current user's like on a quote"""
    services.toggle_like(quote_id, current_viewer().user_id)
    return redirect(_feed_url())


@quotes_bp.route('/add', methods=['GET', 'POST'])
@require_editor_or_admin
def add():
    """Render and submit the new-quote form"""
    if request.method == 'POST':
        names = request.form.getlist('names')
        lines = request.form.getlist('quotes')
        try:
            services.create_quote(names, lines, author_id=current_viewer().user_id)
        except MalformedQuote as e:
            flash(e.message, 'danger')
            rows = list(zip(names, lines)) or BLANK_ROWS
            return render_template('quotes/form.html', rows=rows, action=url_for('quotes.add'),
                                   title='Add a quote'), e.status_code
        flash('Quote added.', 'success')
        return redirect(url_for('quotes.index'))

    return render_template('quotes/form.html', rows=BLANK_ROWS, action=url_for('quotes.add'),
                           title='Add a quote')


@quotes_bp.route('/delete/<int:quote_id>', methods=['POST'])
@require_editor_or_admin
def delete(quote_id):
    """Delete a quote and its likes"""
    services.delete_quote(quote_id)
    flash('Quote deleted.', 'success')
    return redirect(_feed_url())


@quotes_bp.route('/edit/<int:quote_id>', methods=['GET', 'POST'])
@require_admin
def edit(quote_id):
    """Render and submit the edit form for an existing quote"""
    quote = services.get_quote(quote_id)
    action = url_for('quotes.edit', quote_id=quote_id)

    if request.method == 'POST':
        names = request.form.getlist('names')
        lines = request.form.getlist('quotes')
        try:
            services.update_quote(quote_id, names, lines)
        except MalformedQuote as e:
            flash(e.message, 'danger')
            rows = list(zip(names, lines)) or form_rows(quote.quote)
            return render_template('quotes/form.html', rows=rows, action=action,
                                   title='Edit quote'), e.status_code
        flash('Quote updated.', 'success')
        return redirect(url_for('quotes.index'))

    return render_template('quotes/form.html', rows=form_rows(quote.quote), action=action,
                           title='Edit quote')
