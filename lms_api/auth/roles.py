"""Role checks over the three role fields a profile carries.

Profiles predate multi-role support, so a role can be recorded in the legacy
``role`` column, in ``active_role``, or in the ``available_roles`` list.
A user holds a role if any of the three says so.
"""

from typing import Protocol

from lms_api.core.constants import ROLE_ADMIN, ROLE_AFFILIATE


class RoleBearer(Protocol):
    role: str | None
    active_role: str | None
    available_roles: list[str] | None


def has_role(subject: RoleBearer, role: str) -> bool:
    return (
        subject.role == role
        or subject.active_role == role
        or role in (subject.available_roles or ())
    )


def is_admin(subject: RoleBearer) -> bool:
    return has_role(subject, ROLE_ADMIN)


def is_affiliate(subject: RoleBearer) -> bool:
    return has_role(subject, ROLE_AFFILIATE)
