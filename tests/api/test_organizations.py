async def test_creator_is_admin_member(client, owner, organization):
    response = await client.get("/organizations/", headers=owner)

    assert response.status_code == 200
    assert response.json()[0]["slug"] == organization
    assert response.json()[0]["role"] == "ADMIN"


async def test_duplicate_slug_is_rejected(client, owner, organization):
    response = await client.post("/organizations/", json={"name": "Acme Inc."}, headers=owner)

    assert response.status_code == 400


async def test_get_organization(client, owner, organization, user_id):
    response = await client.get(f"/organizations/{organization}", headers=owner)

    assert response.status_code == 200
    assert response.json()["name"] == "Acme Inc"
    assert response.json()["owner_id"] == await user_id(owner)


async def test_non_member_gets_not_found(client, organization, sign_up):
    outsider = await sign_up("Outsider", "outsider@other.com")

    response = await client.get(f"/organizations/{organization}", headers=outsider)

    assert response.status_code == 404
    assert response.json()["code"] == "NotFoundError"


async def test_unknown_organization_is_not_found(client, owner):
    response = await client.get("/organizations/nope", headers=owner)

    assert response.status_code == 404


async def test_membership_lists_permissions(client, organization, join):
    member = await join("Member", "member@acme.com", "MEMBER")

    response = await client.get(f"/organizations/{organization}/membership", headers=member)

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "MEMBER"
    rules = {(rule["action"], rule["resource"]): rule["ownership_required"] for rule in body["permissions"]}
    assert rules[("get", "User")] is False
    assert rules[("delete", "Invite")] is True
    assert ("create", "Invite") not in rules


async def test_billing_user_cannot_get_organization(client, organization, join):
    billing = await join("Billing", "billing@acme.com", "BILLING")

    response = await client.get(f"/organizations/{organization}", headers=billing)

    assert response.status_code == 403
    assert response.json()["code"] == "AuthorizationDenied"


async def test_owner_updates_organization(client, owner, organization):
    response = await client.put(
        f"/organizations/{organization}",
        json={"name": "Acme Renamed", "domain": "acme.com", "should_attach_users_by_domain": True},
        headers=owner,
    )
    assert response.status_code == 204

    response = await client.get(f"/organizations/{organization}", headers=owner)
    assert response.json()["name"] == "Acme Renamed"
    assert response.json()["domain"] == "acme.com"


async def test_admin_who_is_not_owner_cannot_update(client, organization, join):
    admin = await join("Admin", "admin@acme.com", "ADMIN")

    response = await client.put(f"/organizations/{organization}", json={"name": "Hijacked"}, headers=admin)

    assert response.status_code == 403


async def test_member_cannot_shutdown(client, organization, join):
    member = await join("Member", "member@acme.com", "MEMBER")

    response = await client.delete(f"/organizations/{organization}", headers=member)

    assert response.status_code == 403


async def test_admin_shuts_down_organization(client, owner, organization):
    response = await client.post(
        f"/organizations/{organization}/invites", json={"email": "new@acme.com", "role": "MEMBER"}, headers=owner
    )
    assert response.status_code == 201
    invite_id = response.json()["invite_id"]

    response = await client.delete(f"/organizations/{organization}", headers=owner)
    assert response.status_code == 204

    response = await client.get("/organizations/", headers=owner)
    assert response.json() == []

    response = await client.get(f"/invites/{invite_id}")
    assert response.status_code == 404


async def test_transfer_ownership(client, owner, organization, join, user_id):
    member = await join("Member", "member@acme.com", "MEMBER")
    member_id = await user_id(member)

    response = await client.patch(
        f"/organizations/{organization}/owner",
        json={"transfer_to_user_id": member_id},
        headers=owner,
    )
    assert response.status_code == 204

    response = await client.get(f"/organizations/{organization}/membership", headers=member)
    assert response.json()["role"] == "ADMIN"

    # the previous owner is still an admin but no longer owns the organization
    response = await client.patch(
        f"/organizations/{organization}/owner",
        json={"transfer_to_user_id": await user_id(owner)},
        headers=owner,
    )
    assert response.status_code == 403


async def test_transfer_to_non_member_is_rejected(client, owner, organization, sign_up, user_id):
    outsider = await sign_up("Outsider", "outsider@other.com")

    response = await client.patch(
        f"/organizations/{organization}/owner",
        json={"transfer_to_user_id": await user_id(outsider)},
        headers=owner,
    )

    assert response.status_code == 400
