"""Declarative form schema for entities.

Each entity lists its form fields in an explicit ``__form__`` table. The table
drives three things: the descriptors a template renders, the pre-filled values
of an edit form, and the binding of a submitted payload onto an instance.
"""
from dataclasses import dataclass, replace

from wikicms.errors import BindingError

WIDGETS = ('text', 'textarea', 'checkbox', 'select')

# External name of the privacy control on article forms.
PRIVACY_SELECTOR = 'private_select'

_TRUE_VALUES = ('1', 'true', 'on', 'yes')
_FALSE_VALUES = ('', '0', 'false', 'off', 'no')


@dataclass(frozen=True)
class FormField:
    """One row of an entity's form table.

    ``hidden`` fields never reach a form and are never bound. ``bind=False``
    fields are rendered but left to the entity's own hooks.
    """
    attr: str
    name: str = None
    widget: str = 'text'
    label: str = None
    python_type: type = str
    hidden: bool = False
    bind: bool = True

    @property
    def external_name(self):
        return self.name or self.attr


@dataclass
class FieldDescriptor:
    name: str
    type: str
    label: str
    value: str = None
    attr: str = None


class FormEntity:
    """Mixin for entities the generic CRUD engine can handle."""

    __form__ = ()

    def apply_create_defaults(self, form, actor=None):
        """Enforce entity invariants after binding a new record."""

    def apply_update_defaults(self, form, actor=None):
        """Enforce entity invariants after binding onto a loaded record."""


def extract_fields(entity_cls, exclude=()):
    """Build the ordered field descriptors for ``entity_cls``."""
    fields = []
    for field in entity_cls.__form__:
        if field.hidden or field.attr in exclude:
            continue

        widget = field.widget if field.widget in WIDGETS else 'text'
        if field.external_name == PRIVACY_SELECTOR:
            widget = 'select'

        fields.append(FieldDescriptor(
            name=field.external_name,
            type=widget,
            label=field.label or field.attr,
            attr=field.attr,
        ))
    return fields


def prefill_fields(record, fields):
    """Return copies of ``fields`` carrying the current values of ``record``."""
    filled = []
    for descriptor in fields:
        try:
            current = getattr(record, descriptor.attr or descriptor.name)
        except AttributeError:
            filled.append(replace(descriptor))
            continue
        value = '' if current is None else str(current)
        filled.append(replace(descriptor, value=value))
    return filled


def coerce(field, raw):
    """Convert a submitted string to the field's declared type."""
    if field.python_type is bool:
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f'invalid boolean {raw!r}')
    if field.python_type is int:
        return int(raw.strip())
    return field.python_type(raw)


def bind_form(record, form):
    """Copy submitted values onto ``record``.

    Only declared, bindable fields present in ``form`` are touched, so binding
    onto a loaded record is a partial overwrite. Keys with no matching field
    are ignored.
    """
    for field in type(record).__form__:
        if field.hidden or not field.bind:
            continue
        if field.external_name not in form:
            continue
        raw = form.get(field.external_name)
        try:
            value = coerce(field, raw)
        except (TypeError, ValueError) as exc:
            raise BindingError(f"Binding error on field '{field.external_name}': {exc}")
        setattr(record, field.attr, value)
    return record
