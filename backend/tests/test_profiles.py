from sqlalchemy import func, select

from conftest import add_profile
from medlink.crud import profile as profile_crud
from medlink.db.models import Profile, ProfileView
from medlink.schemas.profile import ProfileUpdate
from medlink.store.guard import Outcome


async def test_get_profile_returns_stored_row(db):
    await add_profile(db, "alice", headline="Cardiologist", specialization=["Cardiology"])

    result = await profile_crud.get_profile(db, "alice")

    assert result.outcome is Outcome.SUCCESS
    assert result.value.id == "alice"
    assert result.value.headline == "Cardiologist"
    assert result.value.specialization == ["Cardiology"]


async def test_get_profile_missing_row_gives_placeholder(db):
    result = await profile_crud.get_profile(db, "nobody")

    assert result.outcome is Outcome.NOT_FOUND
    assert result.value.id == "nobody"
    assert result.value.full_name == "Healthcare Professional"
    assert result.value.headline == "Medical Professional"
    assert result.value.specialization == ["General Medicine"]


async def test_get_profile_unavailable_gives_generic_placeholder(bare_db):
    result = await profile_crud.get_profile(bare_db, "alice")

    assert result.outcome is Outcome.UNAVAILABLE
    assert result.value.id == "alice"
    assert result.value.full_name == "User"
    assert result.value.headline == "Healthcare Professional"
    assert result.value.email == "user@example.com"
    assert result.value.is_premium is False
    assert result.value.profile_views == 0


async def test_null_columns_are_normalised(db):
    await add_profile(db, "bob", specialization=None)

    result = await profile_crud.get_profile(db, "bob")

    assert result.value.specialization == []
    assert result.value.is_premium is False


async def test_update_profile_writes_only_given_fields(db):
    await add_profile(db, "alice", headline="Resident", location="Oslo")

    result = await profile_crud.update_profile(db, "alice", ProfileUpdate(headline="Attending"))

    assert result.outcome is Outcome.SUCCESS
    assert result.value.headline == "Attending"
    assert result.value.location == "Oslo"


async def test_update_profile_accepts_dict(db):
    await add_profile(db, "alice")

    result = await profile_crud.update_profile(db, "alice", {"specialization": ["Neurology", "Pediatrics"]})

    assert result.value.specialization == ["Neurology", "Pediatrics"]


async def test_update_missing_profile_returns_none(db):
    result = await profile_crud.update_profile(db, "ghost", ProfileUpdate(headline="x"))

    assert result.outcome is Outcome.NOT_FOUND
    assert result.value is None


async def test_ensure_profile_exists_creates_once(db):
    first = await profile_crud.ensure_profile_exists(db, "carol", "carol@example.org", "Carol")
    second = await profile_crud.ensure_profile_exists(db, "carol", "other@example.org", "Someone Else")

    assert first.outcome is Outcome.SUCCESS
    assert second.value.email == "carol@example.org"
    assert second.value.full_name == "Carol"
    count = await db.scalar(select(func.count()).select_from(Profile).where(Profile.id == "carol"))
    assert count == 1


async def test_ensure_profile_exists_unavailable_writes_nothing(bare_db):
    result = await profile_crud.ensure_profile_exists(bare_db, "carol", "carol@example.org", "Carol")

    assert result.outcome is Outcome.UNAVAILABLE
    assert result.value.id == "carol"
    assert result.value.email == "carol@example.org"
    assert result.value.full_name == "Carol"


async def test_self_view_is_ignored(db):
    await add_profile(db, "alice")

    result = await profile_crud.record_profile_view(db, "alice", "alice")

    assert result.value is False
    count = await db.scalar(select(func.count()).select_from(ProfileView))
    assert count == 0


async def test_repeat_view_keeps_one_row(db):
    await add_profile(db, "alice")
    await add_profile(db, "bob")

    assert (await profile_crud.record_profile_view(db, "bob", "alice")).value is True
    assert (await profile_crud.record_profile_view(db, "bob", "alice")).value is True

    count = await db.scalar(select(func.count()).select_from(ProfileView))
    assert count == 1
