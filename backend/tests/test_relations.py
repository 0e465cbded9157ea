from sqlalchemy.exc import OperationalError, ProgrammingError

from conftest import BASE_TIME
from medlink.db.models import Profile
from medlink.schemas.post import PostRead, PostWithAuthor
from medlink.schemas.profile import AuthorSummary, unknown_author
from medlink.store import relations
from medlink.store.guard import readiness


def _post(post_id, author_id):
    return PostRead(id=post_id, content="text", author_id=author_id, created_at=BASE_TIME, updated_at=BASE_TIME)


async def _attach_authors(db, posts):
    return await relations.attach_related(
        db, posts, PostWithAuthor,
        key="author_id", field="author", model=Profile, schema=AuthorSummary, placeholder=unknown_author,
    )


def test_attach_uses_placeholder_for_missing_keys():
    related = {"alice": AuthorSummary(id="alice", full_name="Alice")}

    shaped = relations.attach(
        [_post("p1", "alice"), _post("p2", "ghost")], PostWithAuthor,
        key="author_id", field="author", related=related, placeholder=unknown_author,
    )

    assert [p.author.full_name for p in shaped] == ["Alice", "Unknown User"]


async def test_dropped_connection_during_related_fetch_marks_store_stale(db, monkeypatch):
    assert await readiness.ensure(db) is True

    async def dropped(*args, **kwargs):
        raise OperationalError("SELECT profiles", {}, Exception("connection reset"))

    monkeypatch.setattr(relations, "fetch_by_ids", dropped)

    shaped = await _attach_authors(db, [_post("p1", "alice")])

    assert shaped[0].author.full_name == "Unknown User"
    assert readiness.reachable is None


async def test_rejected_related_fetch_keeps_store_ready(db, monkeypatch):
    assert await readiness.ensure(db) is True

    async def rejected(*args, **kwargs):
        raise ProgrammingError("SELECT profiles", {}, Exception("column missing"))

    monkeypatch.setattr(relations, "fetch_by_ids", rejected)

    shaped = await _attach_authors(db, [_post("p1", "alice")])

    assert shaped[0].author.id == "alice"
    assert readiness.reachable is True
