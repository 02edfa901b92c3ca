"""HTTP tests: authentication, error mapping and the main routes."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest
from httpx import ASGITransport, AsyncClient

from firefly.api.dependencies.database import get_db
from firefly.api.main import create_application
from firefly.config.settings import settings


@pytest.fixture
async def client(session):
    app = create_application()

    async def _test_db():
        yield session

    app.dependency_overrides[get_db] = _test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def identity_token(claims: dict, secret: str) -> str:
    """Sign a token the way the identity provider does."""
    now = datetime.now(timezone.utc)
    return jwt.encode({**claims, "iat": now, "exp": now + timedelta(hours=1)}, secret, algorithm="HS256")


def auth(user) -> dict:
    token = identity_token(
        {"user_id": str(user.id), "role": user.role.value},
        settings.IDENTITY_TOKEN_SECRET,
    )
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_ready(self, client):
        response = await client.get("/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready"}


class TestAuthentication:
    async def test_missing_token(self, client):
        response = await client.get("/content")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    async def test_bad_signature(self, client, world):
        token = identity_token(
            {"user_id": str(world.member.id), "role": "MEMBER"}, "not-the-secret"
        )
        response = await client.get("/content", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_unknown_role(self, client, world):
        token = identity_token(
            {"sub": str(world.member.id), "role": "OWNER"}, settings.IDENTITY_TOKEN_SECRET
        )
        response = await client.get("/content", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_sub_claim_accepted(self, client, world):
        token = identity_token(
            {"sub": str(world.member.id), "role": "MEMBER"}, settings.IDENTITY_TOKEN_SECRET
        )
        response = await client.get("/content", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200


class TestContentRoutes:
    async def test_create_and_get(self, client, world):
        response = await client.post(
            "/content",
            json={"content_type": "NOTE", "title": "Night routine", "tags": ["sleep"]},
            headers=auth(world.member),
        )
        assert response.status_code == 201
        created = response.json()
        assert created["note_type"] == "TEXT"
        assert created["visibility"] == "PRIVATE"
        assert created["tags"] == ["sleep"]
        assert created["creator"]["id"] == str(world.member.id)
        assert created["url"] is None

        detail = await client.get(f"/content/{created['id']}", headers=auth(world.member))
        assert detail.status_code == 200
        assert detail.json()["documents"] == []

    async def test_private_content_is_404_for_others(self, client, world):
        created = await client.post(
            "/content",
            json={"content_type": "NOTE", "title": "Private"},
            headers=auth(world.member),
        )
        response = await client.get(f"/content/{created.json()['id']}", headers=auth(world.outsider))
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_member_resource_is_403(self, client, world):
        response = await client.post(
            "/content",
            json={"content_type": "RESOURCE", "title": "Guide"},
            headers=auth(world.member),
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "AUTHORIZATION_ERROR"

    async def test_body_validation_is_400(self, client, world):
        response = await client.post(
            "/content", json={"content_type": "NOTE"}, headers=auth(world.member)
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_wrong_variant_field_is_400(self, client, world):
        response = await client.post(
            "/content",
            json={"content_type": "NOTE", "title": "Link", "url": "https://example.org"},
            headers=auth(world.member),
        )
        assert response.status_code == 400
        assert response.json()["error"]["details"]["fields"] == ["url"]

    async def test_list_filters_by_query(self, client, world):
        for content_type in ("NOTE", "RESOURCE"):
            await client.post(
                "/content",
                json={"content_type": content_type, "title": content_type, "visibility": "PUBLIC"},
                headers=auth(world.admin),
            )

        response = await client.get(
            "/content", params={"content_types": "RESOURCE"}, headers=auth(world.member)
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["content"][0]["status"] == "APPROVED"

    async def test_update_delete_and_view(self, client, world):
        created = (
            await client.post(
                "/content",
                json={"content_type": "NOTE", "title": "Draft"},
                headers=auth(world.member),
            )
        ).json()
        path = f"/content/{created['id']}"

        patched = await client.patch(path, json={"title": "Final"}, headers=auth(world.member))
        assert patched.status_code == 200
        assert patched.json()["title"] == "Final"

        viewed = await client.post(f"{path}/view", headers=auth(world.member))
        assert viewed.status_code == 200

        deleted = await client.delete(path, headers=auth(world.member))
        assert deleted.status_code == 204
        assert (await client.get(path, headers=auth(world.member))).status_code == 404

    async def test_rating_out_of_range_is_400(self, client, world):
        created = (
            await client.post(
                "/content",
                json={"content_type": "RESOURCE", "title": "Guide"},
                headers=auth(world.admin),
            )
        ).json()

        bad = await client.put(
            f"/content/{created['id']}/rating", json={"rating": 7}, headers=auth(world.member)
        )
        assert bad.status_code == 400

        good = await client.put(
            f"/content/{created['id']}/rating", json={"rating": 4}, headers=auth(world.member)
        )
        assert good.status_code == 200
        assert good.json()["rating"] == 4

    async def test_curation_queue_requires_admin(self, client, world):
        assert (await client.get("/content/curation-queue", headers=auth(world.volunteer))).status_code == 403
        assert (await client.get("/content/curation-queue", headers=auth(world.admin))).status_code == 200

    async def test_healthcare_categories(self, client, world):
        response = await client.get("/content/healthcare-categories", headers=auth(world.member))
        assert response.status_code == 200
        assert all(category["tags"] for category in response.json())


class TestWriteAuthorization:
    async def _family_note(self, client, world):
        response = await client.post(
            "/content",
            json={
                "content_type": "NOTE",
                "title": "Shared care log",
                "visibility": "FAMILY",
                "family_id": str(world.family_a.id),
                "allow_editing": True,
            },
            headers=auth(world.member),
        )
        return response.json()

    async def test_reader_cannot_grant_themselves_edit_rights(self, client, world):
        note = await self._family_note(client, world)
        path = f"/content/{note['id']}"

        assert (await client.patch(path, json={"title": "Mine"}, headers=auth(world.member_b))).status_code == 403

        self_share = await client.post(
            f"{path}/shares",
            json={"user_id": str(world.member_b.id), "can_edit": True},
            headers=auth(world.member_b),
        )
        assert self_share.status_code == 403
        assert self_share.json()["error"]["code"] == "AUTHORIZATION_ERROR"

        assert (await client.patch(path, json={"title": "Mine"}, headers=auth(world.member_b))).status_code == 403

    async def test_reshare_requires_can_share(self, client, world):
        note = (
            await client.post(
                "/content",
                json={"content_type": "NOTE", "title": "Respite plan", "visibility": "SHARED"},
                headers=auth(world.member),
            )
        ).json()
        shares = f"/content/{note['id']}/shares"

        granted = await client.post(
            shares, json={"user_id": str(world.outsider.id)}, headers=auth(world.member)
        )
        assert granted.status_code == 201
        assert granted.json()["can_share"] is False

        reshare = await client.post(
            shares, json={"user_id": str(world.member_b.id)}, headers=auth(world.outsider)
        )
        assert reshare.status_code == 403

        await client.post(
            shares, json={"user_id": str(world.member_b.id), "can_share": True}, headers=auth(world.member)
        )
        reshare = await client.post(
            shares, json={"user_id": str(world.admin.id)}, headers=auth(world.member_b)
        )
        assert reshare.status_code == 201

    async def test_attach_requires_edit_rights(self, client, world):
        note = (
            await client.post(
                "/content",
                json={"content_type": "NOTE", "title": "Open journal", "visibility": "PUBLIC"},
                headers=auth(world.member),
            )
        ).json()
        documents = f"/content/{note['id']}/documents"
        body = {"document_id": str(world.document.id)}

        denied = await client.post(documents, json=body, headers=auth(world.outsider))
        assert denied.status_code == 403

        attached = await client.post(documents, json=body, headers=auth(world.member))
        assert attached.status_code == 201

        detach = f"{documents}/{world.document.id}"
        assert (await client.delete(detach, headers=auth(world.outsider))).status_code == 403
        assert (await client.delete(detach, headers=auth(world.member))).status_code == 200

    async def test_legacy_note_share_requires_permission(self, client, world):
        note = (
            await client.post(
                "/notes",
                json={"title": "Family log", "visibility": "FAMILY", "family_id": str(world.family_a.id)},
                headers=auth(world.member),
            )
        ).json()

        response = await client.post(
            f"/notes/{note['id']}/shares",
            json={"user_id": str(world.member_b.id), "can_edit": True},
            headers=auth(world.member_b),
        )
        assert response.status_code == 403

    async def test_resource_share_to_named_user(self, client, world):
        resource = (
            await client.post(
                "/resources",
                json={
                    "title": "Local support groups",
                    "content_type": "ARTICLE",
                    "visibility": "FAMILY",
                    "family_id": str(world.family_a.id),
                },
                headers=auth(world.volunteer),
            )
        ).json()
        shares = f"/resources/{resource['id']}/shares"

        named = await client.post(
            shares,
            json={"share_method": "email", "shared_with": str(world.outsider.id)},
            headers=auth(world.member),
        )
        assert named.status_code == 403

        anonymous = await client.post(shares, json={"share_method": "print"}, headers=auth(world.member))
        assert anonymous.status_code == 201


class TestAssignmentRoutes:
    async def test_assign_and_complete(self, client, world):
        note = (
            await client.post(
                "/content",
                json={"content_type": "NOTE", "title": "Rota", "family_id": str(world.family_a.id)},
                headers=auth(world.volunteer),
            )
        ).json()

        created = await client.post(
            f"/content/{note['id']}/assignments",
            json={"title": "Pick up meds", "assigned_to": str(world.member.id), "priority": "HIGH"},
            headers=auth(world.volunteer),
        )
        assert created.status_code == 201
        assignment = created.json()

        mine = await client.get("/assignments/mine", headers=auth(world.member))
        assert [a["id"] for a in mine.json()] == [assignment["id"]]

        done = await client.patch(
            f"/assignments/{assignment['id']}/status",
            json={"status": "COMPLETED", "completion_notes": "Done"},
            headers=auth(world.member),
        )
        assert done.status_code == 200
        assert done.json()["completed_by"] == str(world.member.id)

        reopen = await client.patch(
            f"/assignments/{assignment['id']}/status",
            json={"status": "IN_PROGRESS"},
            headers=auth(world.member),
        )
        assert reopen.status_code == 400

    async def test_assigner_lists_revises_and_withdraws(self, client, world):
        note = (
            await client.post(
                "/content",
                json={"content_type": "NOTE", "title": "Rota", "family_id": str(world.family_a.id)},
                headers=auth(world.volunteer),
            )
        ).json()
        assignment = (
            await client.post(
                f"/content/{note['id']}/assignments",
                json={"title": "Book transport", "assigned_to": str(world.member.id)},
                headers=auth(world.volunteer),
            )
        ).json()
        path = f"/assignments/{assignment['id']}"

        created = await client.get("/assignments/created", headers=auth(world.volunteer))
        assert [a["id"] for a in created.json()] == [assignment["id"]]

        assert (await client.patch(path, json={"priority": "URGENT"}, headers=auth(world.member))).status_code == 403
        revised = await client.patch(path, json={"priority": "URGENT"}, headers=auth(world.volunteer))
        assert revised.status_code == 200
        assert revised.json()["priority"] == "URGENT"

        assert (await client.delete(path, headers=auth(world.member))).status_code == 403
        assert (await client.delete(path, headers=auth(world.volunteer))).status_code == 204
        assert (await client.get("/assignments/mine", headers=auth(world.member))).json() == []

    async def test_unknown_assignment_is_404(self, client, world):
        response = await client.patch(
            f"/assignments/{uuid4()}/status",
            json={"status": "COMPLETED"},
            headers=auth(world.member),
        )
        assert response.status_code == 404


class TestLegacyRoutes:
    async def test_notes(self, client, world):
        created = await client.post(
            "/notes",
            json={"title": "Visit", "content": "Tuesday 3pm", "type": "MEETING"},
            headers=auth(world.member),
        )
        assert created.status_code == 201
        assert created.json()["content"] == "Tuesday 3pm"

        missing = await client.get(f"/notes/{uuid4()}", headers=auth(world.member))
        assert missing.status_code == 404

    async def test_resources(self, client, world):
        created = await client.post(
            "/resources",
            json={"title": "Respite options", "content_type": "LINK", "url": "https://example.org"},
            headers=auth(world.volunteer),
        )
        assert created.status_code == 201
        resource = created.json()
        assert resource["status"] == "PENDING"
        assert resource["visibility"] == "PUBLIC"

        approved = await client.post(f"/resources/{resource['id']}/approve", headers=auth(world.admin))
        assert approved.status_code == 200
        assert approved.json()["status"] == "APPROVED"

        stats = await client.get("/resources/statistics", headers=auth(world.member))
        assert stats.json()["approved_resources"] == 1
