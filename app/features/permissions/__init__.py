"""
Permission management feature module.

Implements organization-scoped Role-Based Access Control (RBAC) with
ownership conditions: a static rule table per role, evaluated against a
validated subject for every request.
"""
from app.features.permissions.roles import Action, ResourceType, Role, PERMISSIONS
from app.features.permissions.subject import Subject, parse_subject
from app.features.permissions.abilities import AbilitySet, Rule, RULES, build_abilities

__all__ = [
    "Action",
    "ResourceType",
    "Role",
    "PERMISSIONS",
    "Subject",
    "parse_subject",
    "AbilitySet",
    "Rule",
    "RULES",
    "build_abilities",
]
