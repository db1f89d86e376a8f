"""Session identity resolution, authentication and the role gate.

The session store is treated as an opaque mapping holding at most one key,
``user_id``. Two lookups are offered on top of it: :func:`resolve_user` is
failure-soft and used for personalization on public pages, while
:func:`authorize` is the mandatory check behind guarded routes and always
raises instead of falling back to an anonymous caller.
"""
from flask import current_app

from wikicms.errors import AuthenticationError, AuthorizationError
from wikicms.extensions import db
from wikicms.models import User
from wikicms.roles import Role, rank, meets

SESSION_KEY = 'user_id'


def _load_user(user_id):
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        current_app.logger.warning('Ignoring malformed session user id %r', user_id)
        return None
    return db.session.get(User, user_id)


def resolve_user(session_store):
    """Return the session's user, or None for an anonymous caller."""
    user_id = session_store.get(SESSION_KEY)
    if user_id is None:
        return None
    user = _load_user(user_id)
    if user is None:
        current_app.logger.info('Session references unknown user %s, treating as anonymous', user_id)
    return user


def caller_rank(user):
    if user is None:
        return Role.VISITOR
    return rank(user.role)


def authorize(session_store, required):
    """Return the session's user if their role reaches ``required``."""
    user_id = session_store.get(SESSION_KEY)
    if user_id is None:
        raise AuthenticationError('Unauthorized: Please login')

    user = _load_user(user_id)
    if user is None:
        raise AuthenticationError('Unauthorized: Invalid session')

    if not meets(rank(user.role), required):
        current_app.logger.info(
            'User %s (%s) denied, %s required', user.id, user.role, Role(required).name
        )
        raise AuthorizationError('Forbidden: Insufficient role')
    return user


def authenticate(mail, password):
    """Check credentials and return the matching user."""
    user = User.query.filter_by(mail=mail).first() if mail else None
    if user is None or not user.check_password(password):
        raise AuthenticationError('Invalid credentials')
    return user


def login(session_store, user):
    session_store.clear()
    session_store[SESSION_KEY] = user.id
    current_app.logger.info('User %s logged in', user.mail)


def logout(session_store):
    session_store.clear()
