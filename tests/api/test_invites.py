async def _invite(client, slug, headers, email, role="MEMBER"):
    response = await client.post(
        f"/organizations/{slug}/invites", json={"email": email, "role": role}, headers=headers
    )
    return response


async def test_admin_creates_and_lists_invites(client, owner, organization):
    response = await _invite(client, organization, owner, "new@acme.com", "BILLING")
    assert response.status_code == 201
    invite_id = response.json()["invite_id"]

    response = await client.get(f"/organizations/{organization}/invites", headers=owner)

    assert response.status_code == 200
    [invite] = response.json()
    assert invite["id"] == invite_id
    assert invite["email"] == "new@acme.com"
    assert invite["role"] == "BILLING"
    assert invite["author"]["name"] == "Owner"


async def test_member_cannot_create_invites(client, organization, join):
    member = await join("Member", "member@acme.com", "MEMBER")

    response = await _invite(client, organization, member, "new@acme.com")

    assert response.status_code == 403
    assert response.json()["message"] == "You're not allowed to create new invites."


async def test_member_can_list_invites(client, organization, join):
    member = await join("Member", "member@acme.com", "MEMBER")

    response = await client.get(f"/organizations/{organization}/invites", headers=member)

    assert response.status_code == 200


async def test_billing_cannot_list_invites(client, organization, join):
    billing = await join("Billing", "billing@acme.com", "BILLING")

    response = await client.get(f"/organizations/{organization}/invites", headers=billing)

    assert response.status_code == 403


async def test_duplicate_invite_is_rejected(client, owner, organization):
    assert (await _invite(client, organization, owner, "new@acme.com")).status_code == 201

    response = await _invite(client, organization, owner, "new@acme.com")

    assert response.status_code == 400


async def test_invite_for_existing_member_is_rejected(client, owner, organization):
    response = await _invite(client, organization, owner, "owner@acme.com")

    assert response.status_code == 400


async def test_invite_for_auto_attached_domain_is_rejected(client, owner, organization):
    response = await client.put(
        f"/organizations/{organization}",
        json={"name": "Acme Inc", "domain": "acme.com", "should_attach_users_by_domain": True},
        headers=owner,
    )
    assert response.status_code == 204

    response = await _invite(client, organization, owner, "someone@acme.com")

    assert response.status_code == 400


async def test_public_invite_details(client, owner, organization):
    invite_id = (await _invite(client, organization, owner, "new@acme.com")).json()["invite_id"]

    response = await client.get(f"/invites/{invite_id}")

    assert response.status_code == 200
    assert response.json()["organization"] == {"name": "Acme Inc", "slug": organization}


async def test_missing_invite_is_not_found(client):
    response = await client.get("/invites/missing")

    assert response.status_code == 404


async def test_pending_invites_and_accept(client, owner, organization, sign_up):
    guest = await sign_up("Guest", "guest@other.com")
    invite_id = (await _invite(client, organization, owner, "guest@other.com", "ADMIN")).json()["invite_id"]

    response = await client.get("/pending-invites", headers=guest)
    assert [invite["id"] for invite in response.json()] == [invite_id]

    response = await client.post(f"/invites/{invite_id}/accept", headers=guest)
    assert response.status_code == 204

    response = await client.get(f"/organizations/{organization}/membership", headers=guest)
    assert response.json()["role"] == "ADMIN"

    response = await client.get("/pending-invites", headers=guest)
    assert response.json() == []


async def test_accepting_someone_elses_invite_is_rejected(client, owner, organization, sign_up):
    intruder = await sign_up("Intruder", "intruder@other.com")
    invite_id = (await _invite(client, organization, owner, "guest@other.com")).json()["invite_id"]

    response = await client.post(f"/invites/{invite_id}/accept", headers=intruder)

    assert response.status_code == 400


async def test_reject_invite(client, owner, organization, sign_up):
    guest = await sign_up("Guest", "guest@other.com")
    invite_id = (await _invite(client, organization, owner, "guest@other.com")).json()["invite_id"]

    response = await client.post(f"/invites/{invite_id}/reject", headers=guest)
    assert response.status_code == 204

    response = await client.get(f"/invites/{invite_id}")
    assert response.status_code == 404


async def test_admin_revokes_invite(client, owner, organization):
    invite_id = (await _invite(client, organization, owner, "new@acme.com")).json()["invite_id"]

    response = await client.post(f"/organizations/{organization}/invites/{invite_id}/revoke", headers=owner)
    assert response.status_code == 204

    response = await client.get(f"/organizations/{organization}/invites", headers=owner)
    assert response.json() == []


async def test_member_revokes_only_invites_they_authored(client, owner, organization, join):
    member = await join("Member", "member@acme.com", "MEMBER")
    admin_invite_id = (await _invite(client, organization, owner, "new@acme.com")).json()["invite_id"]

    response = await client.post(
        f"/organizations/{organization}/invites/{admin_invite_id}/revoke", headers=member
    )
    assert response.status_code == 403

    # an admin demoted to member keeps control of the invites they sent
    admin = await join("Admin", "admin@acme.com", "ADMIN")
    own_invite_id = (await _invite(client, organization, admin, "friend@acme.com")).json()["invite_id"]
    members = (await client.get(f"/organizations/{organization}/members", headers=owner)).json()
    admin_member_id = next(m["id"] for m in members if m["email"] == "admin@acme.com")
    response = await client.put(
        f"/organizations/{organization}/members/{admin_member_id}", json={"role": "MEMBER"}, headers=owner
    )
    assert response.status_code == 204

    response = await client.post(
        f"/organizations/{organization}/invites/{own_invite_id}/revoke", headers=admin
    )
    assert response.status_code == 204


async def test_revoke_unknown_invite_is_not_found(client, owner, organization):
    response = await client.post(f"/organizations/{organization}/invites/missing/revoke", headers=owner)

    assert response.status_code == 404


async def test_invite_for_member_signed_up_with_capitals_is_rejected(client, owner, organization, sign_up):
    guest = await sign_up("Guest", "Guest@other.com")
    invite_id = (await _invite(client, organization, owner, "GUEST@other.com")).json()["invite_id"]
    response = await client.post(f"/invites/{invite_id}/accept", headers=guest)
    assert response.status_code == 204

    response = await _invite(client, organization, owner, "guest@other.com")

    assert response.status_code == 400
    assert response.json()["message"] == "A member with this e-mail already belongs to your organization."
