"""Generic create/read/update/delete over any registered form entity.

Entities plug in through :class:`wikicms.forms.FormEntity`: the engine binds
the submitted payload through the entity's ``__form__`` table, then calls the
entity's create or update hook before persisting. Storage errors are rolled
back and re-raised as :class:`PersistenceError`; nothing is retried.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from wikicms.errors import BindingError, NotFoundError, PersistenceError
from wikicms.extensions import db
from wikicms.forms import extract_fields, prefill_fields, bind_form
from wikicms.models import User
from wikicms.roles import ASSIGNABLE_ROLES


def _parse_id(raw):
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise BindingError(f'Invalid ID: {raw!r}')


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        # The driver error carries no bound parameters (password hashes etc.).
        cause = getattr(exc, 'orig', None) or exc.__class__.__name__
        current_app.logger.error('%s failed: %s', action, cause)
        raise PersistenceError(f'{action} failed: {cause}')


def new_form(entity_cls, exclude=()):
    """Empty field descriptors for a creation form."""
    return extract_fields(entity_cls, exclude)


def get_record(entity_cls, record_id):
    record = db.session.get(entity_cls, _parse_id(record_id))
    if record is None:
        raise NotFoundError(f'{entity_cls.__name__} not found')
    return record


def edit_form(entity_cls, record_id, exclude=()):
    """Load a record and return it with its pre-filled field descriptors."""
    record = get_record(entity_cls, record_id)
    return record, prefill_fields(record, extract_fields(entity_cls, exclude))


def create_record(entity_cls, form, actor=None):
    record = entity_cls()
    bind_form(record, form)
    record.apply_create_defaults(form, actor=actor)

    db.session.add(record)
    _commit(f'Creating {entity_cls.__name__}')
    current_app.logger.info('Created %r', record)
    return record


def update_record(entity_cls, form, actor=None):
    """Bind ``form`` onto the stored record named by its ``id`` field."""
    raw_id = form.get('id')
    if raw_id is None or str(raw_id).strip() == '':
        raise BindingError('Missing ID')
    record = get_record(entity_cls, raw_id)

    bind_form(record, form)
    record.apply_update_defaults(form, actor=actor)

    _commit(f'Updating {entity_cls.__name__} {record.id}')
    current_app.logger.info('Updated %r', record)
    return record


def delete_record(entity_cls, record_id):
    record = get_record(entity_cls, record_id)
    db.session.delete(record)
    _commit(f'Deleting {entity_cls.__name__} {record_id}')
    current_app.logger.info('Deleted %s %s', entity_cls.__name__, record_id)


def promote_user(user_id, new_role, actor=None):
    """Give a user a new role. Administrators cannot change their own role."""
    if new_role not in ASSIGNABLE_ROLES:
        raise BindingError(f'Invalid role: {new_role!r}')

    user = get_record(User, user_id)
    if actor is not None and user.id == actor.id:
        raise BindingError('You cannot change your own role.')

    current_app.logger.info('Promoting user %s from %s to %s', user.mail, user.role, new_role)
    user.role = new_role
    _commit(f'Updating role of user {user.id}')
    return user
