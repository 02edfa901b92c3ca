"""Tests for resource curation and ratings."""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from firefly.shared.core.exceptions import AuthorizationError, ContentNotFoundError, ValidationError
from firefly.shared.models import ContentRating
from firefly.shared.models.enums import ContentType, ResourceStatus
from firefly.shared.schemas.content import ContentFilters


class TestCuration:
    async def test_queue_is_admin_only(self, world, repo):
        with pytest.raises(AuthorizationError):
            await repo.get_curation_queue(world.volunteer.id, world.volunteer.role)

    async def test_queue_oldest_first_and_skips_deleted(self, world, repo, make_resource):
        first = await make_resource(world.volunteer, title="First")
        second = await make_resource(world.volunteer, title="Second")
        gone = await make_resource(world.volunteer, title="Gone")
        await repo.delete(gone.id, world.volunteer.id, world.volunteer.role)

        queue = await repo.get_curation_queue(world.admin.id, world.admin.role)
        assert [c.id for c in queue] == [first.id, second.id]
        assert queue[0].creator.id == world.volunteer.id

    async def test_approve(self, world, repo, make_resource):
        pending = await make_resource(world.volunteer)

        approved = await repo.approve_content(pending.id, world.admin.id, world.admin.role)

        assert approved.status == ResourceStatus.APPROVED
        assert approved.approved_by == world.admin.id
        assert approved.approved_at is not None
        assert approved.has_curation is False
        assert await repo.get_curation_queue(world.admin.id, world.admin.role) == []

    async def test_feature_without_prior_approval(self, world, repo, make_resource):
        pending = await make_resource(world.volunteer)

        featured = await repo.feature_content(pending.id, world.admin.id, world.admin.role)

        assert featured.status == ResourceStatus.FEATURED
        assert featured.featured_by == world.admin.id
        assert featured.featured_at is not None
        assert featured.has_curation is False

        page = await repo.filter(ContentFilters(featured=True), world.member.id, world.member.role)
        assert [c.id for c in page.content] == [pending.id]

    async def test_non_admin_cannot_curate(self, world, repo, make_resource):
        pending = await make_resource(world.volunteer)
        with pytest.raises(AuthorizationError):
            await repo.approve_content(pending.id, world.volunteer.id, world.volunteer.role)
        with pytest.raises(AuthorizationError):
            await repo.feature_content(pending.id, world.member.id, world.member.role)

    async def test_notes_cannot_be_curated(self, world, repo, make_note):
        note = await make_note(world.member)
        with pytest.raises(ContentNotFoundError):
            await repo.approve_content(note.id, world.admin.id, world.admin.role)


class TestRatings:
    async def test_average_and_count(self, world, repo, make_resource):
        resource = await make_resource(world.admin)

        await repo.rate_content(resource.id, world.member.id, 3)
        rating = await repo.rate_content(resource.id, world.member_b.id, 5, review="Very clear")

        assert rating.rating == 5
        assert rating.review == "Very clear"
        assert rating.user.id == world.member_b.id

        refreshed = await repo.find_by_id(resource.id, world.member.id, world.member.role)
        assert refreshed.rating == 4.0
        assert refreshed.rating_count == 2
        assert refreshed.has_ratings is True

    async def test_rerating_replaces_previous(self, world, repo, session, make_resource):
        resource = await make_resource(world.admin)

        first = await repo.rate_content(resource.id, world.member.id, 2, review="Too long")
        second = await repo.rate_content(resource.id, world.member.id, 4, is_helpful=True)

        assert second.id == first.id
        assert second.rating == 4
        assert second.review == "Too long"
        assert second.is_helpful is True

        count = await session.scalar(
            select(func.count()).select_from(ContentRating).where(ContentRating.content_id == resource.id)
        )
        assert count == 1

        refreshed = await repo.find_by_id(resource.id, world.member.id, world.member.role)
        assert refreshed.rating == 4.0
        assert refreshed.rating_count == 1

    async def test_mean_rounds_half_up(self, world, repo, make_resource):
        resource = await make_resource(world.admin)
        for user, value in ((world.member, 4), (world.member_b, 4), (world.outsider, 5)):
            await repo.rate_content(resource.id, user.id, value)

        refreshed = await repo.find_by_id(resource.id, world.member.id, world.member.role)
        assert refreshed.rating == 4.33

    @pytest.mark.parametrize("value", [0, 6, -1])
    async def test_out_of_range(self, world, repo, make_resource, value):
        resource = await make_resource(world.admin)
        with pytest.raises(ValidationError):
            await repo.rate_content(resource.id, world.member.id, value)

    async def test_notes_are_not_ratable(self, world, repo, make_note):
        note = await make_note(world.member)
        with pytest.raises(ValidationError):
            await repo.rate_content(note.id, world.member.id, 5)

    async def test_deleted_resource_is_missing(self, world, repo, make_resource):
        resource = await make_resource(world.admin)
        await repo.delete(resource.id, world.admin.id, world.admin.role)
        with pytest.raises(ContentNotFoundError):
            await repo.rate_content(resource.id, world.member.id, 5)

    async def test_unknown_content(self, world, repo):
        with pytest.raises(ContentNotFoundError):
            await repo.rate_content(uuid4(), world.member.id, 5)

    async def test_min_rating_filter(self, world, repo, make_resource):
        good = await make_resource(world.admin, title="Good")
        poor = await make_resource(world.admin, title="Poor")
        await repo.rate_content(good.id, world.member.id, 5)
        await repo.rate_content(poor.id, world.member.id, 2)

        page = await repo.filter(
            ContentFilters(content_types=[ContentType.RESOURCE], min_rating=4),
            world.member.id,
            world.member.role,
        )
        assert [c.id for c in page.content] == [good.id]

    async def test_average_rating_over_rated_rows(self, world, repo, make_resource):
        assert await repo.average_rating() == 0.0

        a = await make_resource(world.admin, title="A")
        b = await make_resource(world.admin, title="B")
        await make_resource(world.admin, title="Unrated")
        await repo.rate_content(a.id, world.member.id, 5)
        await repo.rate_content(b.id, world.member.id, 3)

        assert await repo.average_rating() == pytest.approx(4.0)
