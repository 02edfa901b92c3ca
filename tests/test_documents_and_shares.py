"""Tests for document attachments and sharing."""

from uuid import uuid4

import pytest

from firefly.shared.core.exceptions import AuthorizationError, ContentNotFoundError, NotFoundError
from firefly.shared.models.enums import Visibility
from firefly.shared.schemas.content import ContentOptions, SharePermissions


class TestDocuments:
    async def test_attach(self, world, repo, make_resource):
        resource = await make_resource(world.admin)

        link = await repo.attach_document(
            resource.id, world.document.id, world.admin.id, order=2, is_main=True
        )

        assert link.content_id == resource.id
        assert link.order == 2
        assert link.is_main is True
        assert link.created_by == world.admin.id
        assert link.document.title == "Care plan"

    async def test_attach_unknown_document(self, world, repo, make_note):
        note = await make_note(world.member)
        with pytest.raises(NotFoundError):
            await repo.attach_document(note.id, uuid4(), world.member.id)

    async def test_attach_to_deleted_content(self, world, repo, make_note):
        note = await make_note(world.member)
        await repo.delete(note.id, world.member.id, world.member.role)
        with pytest.raises(ContentNotFoundError):
            await repo.attach_document(note.id, world.document.id, world.member.id)

    async def test_detach(self, world, repo, make_note):
        note = await make_note(world.member)
        await repo.attach_document(note.id, world.document.id, world.member.id)

        removed = await repo.detach_document(note.id, world.document.id, world.member.id, world.member.role)
        assert removed == 1

        found = await repo.find_by_id(
            note.id, world.member.id, world.member.role, ContentOptions(include_documents=True)
        )
        assert found.documents == []

    async def test_detach_not_attached(self, world, repo, make_note):
        note = await make_note(world.member)
        assert await repo.detach_document(note.id, world.document.id, world.member.id, world.member.role) == 0

    async def test_detach_requires_visibility(self, world, repo, make_note):
        note = await make_note(world.member)
        await repo.attach_document(note.id, world.document.id, world.member.id)
        with pytest.raises(ContentNotFoundError):
            await repo.detach_document(note.id, world.document.id, world.outsider.id, world.outsider.role)

    async def test_detach_requires_edit_rights(self, world, repo, make_note):
        note = await make_note(world.member, visibility=Visibility.FAMILY, family_id=world.family_a.id)
        await repo.attach_document(note.id, world.document.id, world.member.id)
        with pytest.raises(AuthorizationError):
            await repo.detach_document(note.id, world.document.id, world.member_b.id, world.member_b.role)


class TestShares:
    async def test_note_share_defaults(self, world, repo, make_note):
        note = await make_note(world.member, visibility=Visibility.SHARED)

        share = await repo.share_content(note.id, world.member.id, world.outsider.id)

        assert share.can_edit is False
        assert share.can_comment is True
        assert share.can_share is False
        assert share.user.id == world.outsider.id

        found = await repo.find_by_id(note.id, world.member.id, world.member.role)
        assert found.has_sharing is True

    async def test_note_share_explicit_permissions(self, world, repo, make_note):
        note = await make_note(world.member, visibility=Visibility.SHARED)

        share = await repo.share_content(
            note.id,
            world.member.id,
            world.outsider.id,
            SharePermissions(can_edit=True, can_comment=False, can_share=True),
        )

        assert (share.can_edit, share.can_comment, share.can_share) == (True, False, True)

    async def test_resource_share_has_no_permission_bits(self, world, repo, make_resource):
        resource = await make_resource(world.admin)

        share = await repo.share_content(
            resource.id,
            world.member.id,
            None,
            share_method="email",
            share_data={"to": "aunt@example.org"},
        )

        assert share.user_id is None
        assert share.user is None
        assert share.share_method == "email"
        assert share.share_data == {"to": "aunt@example.org"}
        assert (share.can_edit, share.can_comment, share.can_share) == (None, None, None)

    async def test_share_unknown_content(self, world, repo):
        with pytest.raises(ContentNotFoundError):
            await repo.share_content(uuid4(), world.member.id, world.outsider.id)

    async def test_shares_loaded_on_detail(self, world, repo, make_note):
        note = await make_note(world.member, visibility=Visibility.SHARED)
        await repo.share_content(note.id, world.member.id, world.member_b.id)

        found = await repo.find_by_id(
            note.id, world.member.id, world.member.role, ContentOptions(include_shares=True)
        )
        assert [s.user_id for s in found.shares] == [world.member_b.id]


class TestAuthorizeUpdate:
    async def test_reader_cannot_modify(self, world, repo, make_note):
        note = await make_note(world.member, visibility=Visibility.PUBLIC)
        with pytest.raises(AuthorizationError):
            await repo.authorize_update(note.id, world.outsider.id, world.outsider.role)

    async def test_hidden_content_reads_as_missing(self, world, repo, make_note):
        note = await make_note(world.member)
        with pytest.raises(ContentNotFoundError):
            await repo.authorize_update(note.id, world.outsider.id, world.outsider.role)

    async def test_creator_and_editor_share(self, world, repo, make_note):
        note = await make_note(world.member, visibility=Visibility.SHARED, allow_editing=True)
        await repo.share_content(note.id, world.member.id, world.outsider.id, SharePermissions(can_edit=True))

        assert (await repo.authorize_update(note.id, world.member.id, world.member.role)).id == note.id
        assert (await repo.authorize_update(note.id, world.outsider.id, world.outsider.role)).id == note.id


class TestAuthorizeShare:
    async def test_family_reader_cannot_share(self, world, repo, make_note):
        note = await make_note(
            world.member, visibility=Visibility.FAMILY, family_id=world.family_a.id, allow_editing=True
        )
        with pytest.raises(AuthorizationError):
            await repo.authorize_share(note.id, world.member_b.id, world.member_b.role)

    async def test_share_holder_needs_can_share(self, world, repo, make_note):
        note = await make_note(world.member, visibility=Visibility.SHARED)
        await repo.share_content(note.id, world.member.id, world.outsider.id)
        await repo.share_content(note.id, world.member.id, world.member_b.id, SharePermissions(can_share=True))

        with pytest.raises(AuthorizationError):
            await repo.authorize_share(note.id, world.outsider.id, world.outsider.role)
        assert (await repo.authorize_share(note.id, world.member_b.id, world.member_b.role)).id == note.id

    async def test_admin_and_creator(self, world, repo, make_note):
        note = await make_note(world.member)
        await repo.authorize_share(note.id, world.member.id, world.member.role)
        await repo.authorize_share(note.id, world.admin.id, world.admin.role)

    async def test_public_resource_passed_on_by_any_reader(self, world, repo, make_resource):
        public = await make_resource(world.admin)
        family = await make_resource(
            world.volunteer, visibility=Visibility.FAMILY, family_id=world.family_a.id
        )

        await repo.authorize_share(public.id, world.outsider.id, world.outsider.role)
        with pytest.raises(AuthorizationError):
            await repo.authorize_share(family.id, world.member.id, world.member.role)
