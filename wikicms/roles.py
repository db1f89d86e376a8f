"""Role hierarchy.

Roles form a fixed total order. Every access decision in the application goes
through :func:`rank`, so an unknown or missing role name always resolves to the
lowest rank.
"""
from enum import IntEnum


class Role(IntEnum):
    VISITOR = 0
    MEMBER = 1
    EDITOR = 2
    EDITOR_IN_CHIEF = 3
    ADMIN = 4


# Stored role names, in rank order.
ROLE_NAMES = ('Visitor', 'Member', 'Editor', 'EditorInChief', 'Admin')

# Names an administrator may hand out. Visitor is the absence of an account.
ASSIGNABLE_ROLES = ROLE_NAMES[1:]

DEFAULT_ROLE = 'Member'

_RANKS = {name: Role(level) for level, name in enumerate(ROLE_NAMES)}


def rank(role_name):
    """Return the :class:`Role` for a stored role name (Visitor if unknown)."""
    return _RANKS.get(role_name, Role.VISITOR)


def meets(actual, required):
    return actual >= required


def required_rank(role_name):
    """Rank a configured minimum role. Unlike :func:`rank`, unknown names raise."""
    if role_name not in _RANKS:
        raise ValueError(f'Unknown role {role_name!r}, expected one of {ROLE_NAMES}')
    return _RANKS[role_name]
