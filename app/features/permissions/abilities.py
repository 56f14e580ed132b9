"""
Ability engine: static rule table plus a pure evaluator.

Usage:
    ability = build_abilities(Subject(id=user.id, role=Role.MEMBER))

    ability.can("get", "User")                   # class-level check
    ability.can("delete", "Invite", invite)      # instance check, ownership applies
    ability.cannot("transfer_ownership", "Organization", organization)

A rule with an ownership condition only grants when an instance is supplied
and the condition holds for it. Class-level checks on such rules deny.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from app.core.errors import UnknownPermissionError
from app.features.permissions.roles import Action, PERMISSIONS, ResourceType, Role
from app.features.permissions.subject import Subject
from app.utils import get_logger


log = get_logger(__name__)

Condition = Callable[[Subject, Any], bool]
PermissionKey = Tuple[Action, ResourceType]


@dataclass(frozen=True)
class Rule:
    role: Role
    action: Action
    resource: ResourceType
    condition: Optional[Condition] = None


def _field(instance: Any, name: str) -> Any:
    if isinstance(instance, Mapping):
        return instance.get(name)
    return getattr(instance, name, None)


def owned_by(field_name: str) -> Condition:
    """Condition granting only when ``instance.<field_name>`` is the subject id."""
    def condition(subject: Subject, instance: Any) -> bool:
        owner_id = _field(instance, field_name)
        return owner_id is not None and owner_id == subject.id

    condition.__name__ = f"owned_by_{field_name}"
    return condition


# ============================================================================
# Rule Table
# ============================================================================

_ADMIN_OWNER_ONLY = {
    (Action.UPDATE, ResourceType.ORGANIZATION),
    (Action.TRANSFER_OWNERSHIP, ResourceType.ORGANIZATION),
}


def _admin_rules() -> List[Rule]:
    rules = []
    for action, resource in sorted(PERMISSIONS, key=lambda key: (key[1].value, key[0].value)):
        if (action, resource) in _ADMIN_OWNER_ONLY:
            rules.append(Rule(Role.ADMIN, action, resource, owned_by("owner_id")))
        else:
            rules.append(Rule(Role.ADMIN, action, resource))
    return rules


RULES: Tuple[Rule, ...] = (
    *_admin_rules(),

    Rule(Role.MEMBER, Action.GET, ResourceType.USER),
    Rule(Role.MEMBER, Action.GET, ResourceType.ORGANIZATION),
    Rule(Role.MEMBER, Action.GET, ResourceType.INVITE),
    Rule(Role.MEMBER, Action.UPDATE, ResourceType.INVITE, owned_by("author_id")),
    Rule(Role.MEMBER, Action.DELETE, ResourceType.INVITE, owned_by("author_id")),
    Rule(Role.MEMBER, Action.GET, ResourceType.PROJECT),
    Rule(Role.MEMBER, Action.CREATE, ResourceType.PROJECT),
    Rule(Role.MEMBER, Action.UPDATE, ResourceType.PROJECT, owned_by("owner_id")),
    Rule(Role.MEMBER, Action.DELETE, ResourceType.PROJECT, owned_by("owner_id")),

    Rule(Role.BILLING, Action.GET, ResourceType.BILLING),
    Rule(Role.BILLING, Action.EXPORT, ResourceType.BILLING),
)


def _check_rules(rules: Tuple[Rule, ...]) -> None:
    for rule in rules:
        if (rule.action, rule.resource) not in PERMISSIONS:
            raise UnknownPermissionError(
                f"Rule for {rule.role.value} references unknown permission "
                f"{rule.action.value} on {rule.resource.value}"
            )


_check_rules(RULES)


def permission_key(
    action: Union[Action, str],
    resource: Union[ResourceType, str],
) -> PermissionKey:
    """
    Normalize an (action, resource) pair and check it against the catalog.

    Raises:
        UnknownPermissionError: if either value or the pair itself is unknown
    """
    try:
        key = (Action(action), ResourceType(resource))
    except ValueError as exc:
        raise UnknownPermissionError(f"Unknown permission: {action} on {resource}") from exc

    if key not in PERMISSIONS:
        raise UnknownPermissionError(f"Unknown permission: {key[0].value} on {key[1].value}")
    return key


# ============================================================================
# Ability Evaluation
# ============================================================================

class AbilitySet:
    """
    Permission surface of one subject.

    Request scoped and immutable; build a new one per request with
    ``build_abilities``.
    """

    __slots__ = ("subject", "_rules")

    def __init__(self, subject: Subject, rules: Dict[PermissionKey, Tuple[Rule, ...]]):
        self.subject = subject
        self._rules = rules

    def can(
        self,
        action: Union[Action, str],
        resource: Union[ResourceType, str],
        instance: Any = None,
    ) -> bool:
        key = permission_key(action, resource)

        for rule in self._rules.get(key, ()):
            if rule.condition is None:
                granted = True
            elif instance is None:
                # class-level check against an ownership rule
                continue
            else:
                granted = rule.condition(self.subject, instance)

            if granted:
                log.debug(
                    "Subject %s (%s) granted %s on %s",
                    self.subject.id, self.subject.role.value, key[0].value, key[1].value,
                )
                return True

        log.debug(
            "Subject %s (%s) denied %s on %s",
            self.subject.id, self.subject.role.value, key[0].value, key[1].value,
        )
        return False

    def cannot(
        self,
        action: Union[Action, str],
        resource: Union[ResourceType, str],
        instance: Any = None,
    ) -> bool:
        return not self.can(action, resource, instance)

    def rules(self) -> List[Dict[str, Any]]:
        """Granted pairs, flagged when they only apply to owned instances."""
        return [
            {
                "action": action.value,
                "resource": resource.value,
                "ownership_required": all(rule.condition is not None for rule in rules),
            }
            for (action, resource), rules in sorted(
                self._rules.items(), key=lambda item: (item[0][1].value, item[0][0].value)
            )
        ]

    def __repr__(self) -> str:
        return f"<AbilitySet(subject={self.subject.id}, role={self.subject.role.value})>"


def build_abilities(subject: Subject) -> AbilitySet:
    """Select the rules of ``subject.role`` into a map keyed by (action, resource)."""
    grouped: Dict[PermissionKey, List[Rule]] = {}
    for rule in RULES:
        if rule.role is subject.role:
            grouped.setdefault((rule.action, rule.resource), []).append(rule)

    return AbilitySet(subject, {key: tuple(rules) for key, rules in grouped.items()})
