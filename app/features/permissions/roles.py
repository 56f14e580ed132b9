"""
Closed vocabulary shared by the rule table and every caller.

Constructing any of these enums from an unknown string raises ``ValueError``.
"""
import enum


class Role(str, enum.Enum):
    """Role of a user within an organization."""
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    BILLING = "BILLING"


class Action(str, enum.Enum):
    CREATE = "create"
    GET = "get"
    UPDATE = "update"
    DELETE = "delete"
    INVITE = "invite"
    EXPORT = "export"
    TRANSFER_OWNERSHIP = "transfer_ownership"


class ResourceType(str, enum.Enum):
    USER = "User"
    INVITE = "Invite"
    ORGANIZATION = "Organization"
    BILLING = "Billing"
    PROJECT = "Project"


# Every (action, resource) pair subject to control
PERMISSIONS: frozenset[tuple[Action, ResourceType]] = frozenset(
    (action, resource)
    for resource, actions in {
        ResourceType.USER: (Action.GET, Action.UPDATE, Action.DELETE, Action.INVITE),
        ResourceType.INVITE: (Action.CREATE, Action.GET, Action.UPDATE, Action.DELETE),
        ResourceType.ORGANIZATION: (
            Action.CREATE, Action.GET, Action.UPDATE, Action.DELETE, Action.TRANSFER_OWNERSHIP
        ),
        ResourceType.BILLING: (Action.GET, Action.EXPORT),
        ResourceType.PROJECT: (Action.CREATE, Action.GET, Action.UPDATE, Action.DELETE),
    }.items()
    for action in actions
)
