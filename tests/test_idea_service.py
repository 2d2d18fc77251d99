"""Service-level tests for idea submission and listing."""

import logging

import pytest
from sqlalchemy import Text

from pitchscore.exceptions import NotFoundError, ValidationError
from pitchscore.models.idea import Idea
from pitchscore.models.user import User
from pitchscore.services import ideas as idea_service


async def _make_user(db, email: str = "a@x.com") -> User:
    user = User(email=email, password_hash="not-a-real-hash")
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


class TestCreateIdea:
    async def test_persists_analysis_blob(self, db_session):
        user = await _make_user(db_session)

        result = await idea_service.create_idea(db_session, user.id, "T", "C")

        stored = await db_session.get(Idea, result.id)
        assert stored.user_id == user.id
        assert stored.analysis_json == result.analysis.model_dump_json()

    async def test_long_title_is_stored_whole(self, db_session):
        user = await _make_user(db_session)
        title = "Pitch " * 200

        result = await idea_service.create_idea(db_session, user.id, title, "C")

        stored = await db_session.get(Idea, result.id)
        assert stored.title == title
        # unbounded column, so length-enforcing backends accept it too
        assert isinstance(Idea.__table__.c.title.type, Text)

    async def test_unknown_user(self, db_session):
        with pytest.raises(NotFoundError):
            await idea_service.create_idea(db_session, 12345, "T", "C")

    @pytest.mark.parametrize("title,content", [("", "C"), ("T", ""), (None, "C"), ("T", None)])
    async def test_requires_title_and_content(self, db_session, title, content):
        user = await _make_user(db_session)

        with pytest.raises(ValidationError):
            await idea_service.create_idea(db_session, user.id, title, content)


class TestListIdeas:
    async def test_round_trip_matches_creation(self, db_session):
        user = await _make_user(db_session)
        created = await idea_service.create_idea(db_session, user.id, "T", "C")

        [listed] = await idea_service.list_ideas(db_session, user.id)

        assert listed.analysis == created.analysis

    async def test_order_is_non_increasing(self, db_session):
        user = await _make_user(db_session)
        for n in range(5):
            await idea_service.create_idea(db_session, user.id, f"Idea {n}", "C")

        items = await idea_service.list_ideas(db_session, user.id)

        stamps = [item.created_at for item in items]
        assert stamps == sorted(stamps, reverse=True)
        assert [item.title for item in items] == [f"Idea {n}" for n in reversed(range(5))]

    async def test_only_owner_ideas(self, db_session):
        alice = await _make_user(db_session, "alice@x.com")
        bob = await _make_user(db_session, "bob@x.com")
        await idea_service.create_idea(db_session, alice.id, "A", "C")

        assert await idea_service.list_ideas(db_session, bob.id) == []

    async def test_unreadable_blob_is_dropped_and_logged(self, db_session, caplog):
        user = await _make_user(db_session)
        db_session.add_all([
            Idea(user_id=user.id, title="broken", content="C", analysis_json="{not json"),
            Idea(user_id=user.id, title="wrong shape", content="C", analysis_json='{"score": "high"}'),
            Idea(user_id=user.id, title="none", content="C", analysis_json=None),
        ])
        await db_session.commit()

        with caplog.at_level(logging.WARNING, logger="pitchscore.services.ideas"):
            items = await idea_service.list_ideas(db_session, user.id)

        assert len(items) == 3
        assert all(item.analysis is None for item in items)
        assert sum("Could not parse stored analysis" in r.message for r in caplog.records) == 2
