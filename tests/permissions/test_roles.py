import pytest

from app.features.permissions.roles import Action, ResourceType, Role, PERMISSIONS


def test_role_from_value():
    assert Role("ADMIN") is Role.ADMIN
    assert Role("BILLING") is Role.BILLING


@pytest.mark.parametrize("value", ["admin", "OWNER", "", "NOT_A_ROLE"])
def test_unknown_role_is_rejected(value):
    with pytest.raises(ValueError):
        Role(value)


def test_unknown_action_and_resource_are_rejected():
    with pytest.raises(ValueError):
        Action("manage")
    with pytest.raises(ValueError):
        ResourceType("all")


def test_catalog_only_uses_vocabulary_members():
    assert (Action.INVITE, ResourceType.USER) in PERMISSIONS
    assert (Action.TRANSFER_OWNERSHIP, ResourceType.ORGANIZATION) in PERMISSIONS
    assert (Action.EXPORT, ResourceType.BILLING) in PERMISSIONS
    assert (Action.TRANSFER_OWNERSHIP, ResourceType.INVITE) not in PERMISSIONS
    assert {resource for _, resource in PERMISSIONS} == set(ResourceType)
