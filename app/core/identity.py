"""Authenticated actor descriptor supplied by upstream middleware."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from fastapi import Depends, Header

from app.core.exceptions import forbidden_exception, unauthorized_exception


class Role(StrEnum):
    SEEKER = "seeker"
    RECRUITER = "recruiter"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """Identifier and role of the caller.

    Credentials are verified upstream; the descriptor is trusted as-is.
    """

    id: str
    role: Role


def get_current_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_role: str | None = Header(default=None),
) -> Actor:
    """Build the actor from the identity headers."""
    if not x_actor_id or not x_actor_id.strip() or not x_actor_role:
        raise unauthorized_exception("Unauthorized")

    try:
        role = Role(x_actor_role.strip().lower())
    except ValueError:
        raise unauthorized_exception("Unauthorized")

    return Actor(id=x_actor_id.strip(), role=role)


def require_roles(*roles: Role) -> Callable[..., Actor]:
    """Dependency factory that admits only the given roles."""

    def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            raise forbidden_exception()
        return actor

    return dependency
