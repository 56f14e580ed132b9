"""
Permission resolution for route handlers.

Route handlers call ``resolve_permissions`` (or depend on ``get_ability``) and
gate every mutation or sensitive read with ``ensure_can`` before touching the
database:

    @router.post("/{slug}/invites")
    async def create_invite(ability: AbilitySet = Depends(get_ability), ...):
        ensure_can(ability, Action.CREATE, ResourceType.INVITE,
                   message="You're not allowed to create a new invite.")
"""
from typing import Annotated, Any, Optional, Union
from fastapi import Depends

from app.core.errors import AuthorizationDenied
from app.features.organizations.dependencies import UserMembership, get_user_membership
from app.features.permissions.abilities import AbilitySet, build_abilities
from app.features.permissions.roles import Action, ResourceType, Role
from app.features.permissions.subject import parse_subject
from app.utils import get_logger


log = get_logger(__name__)


def resolve_permissions(user_id: str, role: Union[Role, str]) -> AbilitySet:
    """
    Build the abilities of ``user_id`` acting with ``role``.

    Performs no I/O: authentication and the membership lookup happen upstream.

    Raises:
        ValidationError: if the user id is blank or the role is unknown
    """
    return build_abilities(parse_subject(user_id, role))


def ensure_can(
    ability: AbilitySet,
    action: Union[Action, str],
    resource: Union[ResourceType, str],
    instance: Any = None,
    message: Optional[str] = None,
) -> None:
    """
    Raise AuthorizationDenied unless ``ability`` grants the action.

    Raises:
        AuthorizationDenied: if the action is not allowed
        UnknownPermissionError: if the (action, resource) pair is not in the catalog
    """
    if ability.cannot(action, resource, instance):
        subject = ability.subject
        log.info(
            "Permission denied: user=%s role=%s action=%s resource=%s",
            subject.id, subject.role.value, Action(action).value, ResourceType(resource).value,
        )
        raise AuthorizationDenied(
            message or f"You're not allowed to {Action(action).value} {ResourceType(resource).value}."
        )


async def get_ability(
    user_membership: Annotated[UserMembership, Depends(get_user_membership)]
) -> AbilitySet:
    """FastAPI dependency resolving the current user's abilities in the ``{slug}`` organization."""
    membership = user_membership.membership
    return resolve_permissions(membership.user_id, membership.role)
