"""
Admin Routes

User listing, role changes, profile edits and deletion.
"""

from flask import render_template, request, redirect, url_for, flash

from quotewall.admin import admin_bp, services
from quotewall.auth.access import current_viewer, require_admin
from quotewall.errors import DuplicateEmail, InvalidRole, SelfDeletion
from quotewall.models import Role


def _users_page():
    return render_template('admin/users.html',
                           users=services.list_users(),
                           roles=Role.values(),
                           viewer=current_viewer())


@admin_bp.route('/users')
@require_admin
def users():
    """List all users with their roles"""
    return _users_page()


@admin_bp.route('/users/<int:user_id>/role', methods=['POST'])
@require_admin
def change_role(user_id):
    """Change a user's role"""
    role = request.form.get('role', '').strip()
    try:
        user = services.set_role(user_id, role)
    except InvalidRole as e:
        flash(e.message, 'danger')
        return _users_page(), e.status_code
    flash(f'{user.username} is now {user.role}.', 'success')
    return redirect(url_for('admin.users'))


@admin_bp.route('/users/<int:user_id>/delete', methods=['POST'])
@require_admin
def delete_user(user_id):
    """Delete a user (never the acting admin)"""
    try:
        services.delete_user(user_id, current_viewer().user_id)
    except SelfDeletion as e:
        flash(e.message, 'danger')
        return _users_page(), e.status_code
    flash('User deleted.', 'success')
    return redirect(url_for('admin.users'))


@admin_bp.route('/users/<int:user_id>/update', methods=['POST'])
@require_admin
def update_user(user_id):
    """Change a user's username and email"""
    username = request.form.get('username', '').strip()
    email = request.form.get('email', '').strip()
    if not username or not email:
        flash('Username and email are required.', 'danger')
        return _users_page(), 400

    try:
        services.update_profile(user_id, username, email)
    except DuplicateEmail as e:
        flash(e.message, 'danger')
        return _users_page(), e.status_code
    flash('User updated.', 'success')
    return redirect(url_for('admin.users'))
