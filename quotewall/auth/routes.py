"""
Auth Routes

Login, registration and logout forms.
"""

from flask import render_template, request, redirect, url_for, flash
from flask_login import current_user

from quotewall.auth import auth_bp, services
from quotewall.errors import DuplicateEmail, InvalidCredentials


def _safe_next(target):
    """Only follow local redirect targets."""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login route"""
    if current_user.is_authenticated:
        return redirect(url_for('quotes.index'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please provide both email and password.', 'danger')
            return render_template('auth/login.html'), 400

        try:
            services.login(email, password)
        except InvalidCredentials as e:
            flash(e.message, 'danger')
            return render_template('auth/login.html', email=email), e.status_code

        next_page = _safe_next(request.args.get('next'))
        return redirect(next_page or url_for('quotes.index'))

    return render_template('auth/login.html')


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """User registration route"""
    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        if not username or not email or not password:
            flash('Username, email and password are required.', 'danger')
            return render_template('auth/register.html'), 400

        try:
            services.register(username, email, password)
        except DuplicateEmail as e:
            flash(e.message, 'danger')
            return render_template('auth/register.html', username=username), e.status_code

        flash('Registration successful! Please login.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html')


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    """User logout route"""
    services.logout()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
