"""
Authorization mapping: derive authorities and the principal view from a user.

These are pure functions over a loaded User; the entity itself carries no
security behaviour.
"""

from collections.abc import Iterable

from book_network.models import Role, User
from book_network.schemas.auth import AuthenticatedPrincipal


def authorities_from_roles(roles: Iterable[Role]) -> frozenset[str]:
    """One authority per role name; ordering is irrelevant."""
    return frozenset(role.name for role in roles)


def get_authorities(user: User) -> frozenset[str]:
    return authorities_from_roles(user.roles or ())


def principal_name(user: User) -> str:
    """The login identifier (email) used as the principal name and JWT subject."""
    return user.email


def full_name(user: User) -> str:
    return f"{user.firstname or ''} {user.lastname or ''}".strip()


def is_account_non_locked(user: User) -> bool:
    return not user.account_locked


def is_enabled(user: User) -> bool:
    return bool(user.enabled)


def to_principal(user: User) -> AuthenticatedPrincipal:
    """Identity-claim view of a user, attached to the request once authenticated."""
    return AuthenticatedPrincipal(
        id=user.id,
        email=principal_name(user),
        full_name=full_name(user),
        authorities=get_authorities(user),
    )


def has_authority(principal: AuthenticatedPrincipal, *required: str) -> bool:
    """True if the principal holds at least one of the required authorities."""
    return any(authority in principal.authorities for authority in required)
