"""Authentication routes, registration and RBAC decorators."""
from functools import wraps

from flask import Blueprint, g, redirect, request, session, url_for, flash
from flask_babel import gettext as _

from wikicms.errors import BindingError
from wikicms.models import User
from wikicms.pages import LoginPage, RecordFormPage, RecordSuccessPage, render_page
from wikicms.roles import Role
from wikicms.services import crud, identity

auth_bp = Blueprint('auth', __name__)


@auth_bp.before_app_request
def load_current_user():
    """Resolve the session's user once per request (None when anonymous)."""
    g.current_user = identity.resolve_user(session)


# ==================== RBAC Decorators ====================

def role_required(required):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            g.current_user = identity.authorize(session, required)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def editor_required(f):
    return role_required(Role.EDITOR)(f)


def admin_required(f):
    return role_required(Role.ADMIN)(f)


# ==================== Routes ====================

@auth_bp.route('/form_user')
def register_form():
    page = RecordFormPage(
        current_user=g.current_user,
        type_name='User',
        fields=crud.new_form(User, exclude=('role',)),
    )
    return render_page('record_form.html', page)


@auth_bp.route('/create_user', methods=['POST'])
def register():
    mail = (request.form.get('mail') or '').strip()
    if mail and User.query.filter_by(mail=mail).first() is not None:
        raise BindingError(_('User %(mail)s is already registered.', mail=mail))

    user = crud.create_record(User, request.form)
    page = RecordSuccessPage(current_user=g.current_user, type_name='User', record=user)
    return render_page('record_success.html', page)


@auth_bp.route('/login', methods=['GET'])
def login_form():
    return render_page('login.html', LoginPage(current_user=g.current_user))


@auth_bp.route('/login', methods=['POST'])
def login():
    user = identity.authenticate(request.form.get('email'), request.form.get('password'))
    identity.login(session, user)
    flash(_('Welcome back, %(name)s.', name=user.display_name))
    return redirect(url_for('articles.article_list'))


@auth_bp.route('/logout')
def logout():
    identity.logout(session)
    return redirect(url_for('auth.login_form'))
