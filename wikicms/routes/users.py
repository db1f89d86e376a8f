"""User management routes."""
from flask import Blueprint, g, redirect, request, url_for, flash
from flask_babel import gettext as _

from wikicms.models import User
from wikicms.pages import UserListPage, render_page
from wikicms.roles import ASSIGNABLE_ROLES
from wikicms.routes.auth import admin_required
from wikicms.services import crud

users_bp = Blueprint('users', __name__)


@users_bp.route('/users')
@admin_required
def users_list():
    """List all users for admin management."""
    users = User.query.order_by(User.created_at.desc()).all()
    page = UserListPage(current_user=g.current_user, users=users, roles=ASSIGNABLE_ROLES)
    return render_page('list_users.html', page)


@users_bp.route('/promote_user/<int:user_id>', methods=['POST'])
@admin_required
def promote_user(user_id):
    """Update a user's role."""
    user = crud.promote_user(user_id, request.form.get('new_role'), actor=g.current_user)
    flash(_('Role of %(mail)s updated to %(role)s.', mail=user.mail, role=user.role))
    return redirect(url_for('users.users_list'))
