from __future__ import annotations

import asyncio

import pytest

from app.core.db import make_engine, make_session_factory
from app.core.errors import DuplicateKey, ForbiddenFieldUpdate, StorageFault, ValidationError
from app.db.repositories import DocumentStore, StructureStore, UserStore
from app.domains.documents.entities import Document
from app.domains.identity.entities import User
from app.domains.structures.entities import Structure


def _user(name: str, is_admin: bool = False) -> User:
    return User(name=name, password_hash="x" * 60, is_admin=is_admin)


@pytest.mark.asyncio
async def test_insert_assigns_id_and_query_returns_entity(session_factory):
    store = UserStore(session_factory)

    stored = await store.insert(_user("alpha"))
    assert stored.id and stored.name == "alpha"
    assert stored.created_at is not None

    assert await store.count() == 1
    assert (await store.get(stored.id)).name == "alpha"
    assert [u.id for u in await store.query({"name": "alpha"})] == [stored.id]


@pytest.mark.asyncio
async def test_query_supports_value_in_set_and_empty_results(session_factory):
    store = UserStore(session_factory)
    a = await store.insert(_user("a"))
    b = await store.insert(_user("b"))
    await store.insert(_user("c"))

    found = await store.query({"id": [a.id, b.id]})
    assert {u.name for u in found} == {"a", "b"}

    assert await store.query({"name": "missing"}) == []
    assert await store.query({"id": []}) == []
    assert await store.count({"name": ("a", "c")}) == 2


@pytest.mark.asyncio
async def test_query_on_unknown_field_is_rejected(session_factory):
    store = UserStore(session_factory)
    with pytest.raises(ValidationError):
        await store.query({"password_hash": "x"})


@pytest.mark.asyncio
async def test_insert_duplicate_name_fails(session_factory):
    store = UserStore(session_factory)
    await store.insert(_user("alpha"))

    with pytest.raises(DuplicateKey) as exc:
        await store.insert(_user("alpha"))
    assert exc.value.field == "name"
    assert await store.count() == 1


@pytest.mark.asyncio
async def test_concurrent_inserts_with_same_name_only_one_wins(session_factory):
    store = UserStore(session_factory)

    results = await asyncio.gather(
        *[store.insert(_user("same")) for _ in range(5)], return_exceptions=True
    )

    created = [r for r in results if isinstance(r, User)]
    failed = [r for r in results if isinstance(r, DuplicateKey)]
    assert len(created) == 1
    assert len(failed) == 4
    assert await store.count({"name": "same"}) == 1


@pytest.mark.asyncio
async def test_update_merges_fields(session_factory):
    store = UserStore(session_factory)
    user = await store.insert(_user("alpha"))

    assert await store.update(user.id, {"email": "a@example.com"}) == 1

    updated = await store.get(user.id)
    assert updated.email == "a@example.com"
    assert updated.name == "alpha"


@pytest.mark.asyncio
async def test_update_missing_entity_returns_zero(session_factory):
    store = UserStore(session_factory)
    assert await store.update("missing", {"email": "a@example.com"}) == 0


@pytest.mark.asyncio
async def test_update_to_existing_name_fails_without_change(session_factory):
    store = UserStore(session_factory)
    await store.insert(_user("alpha"))
    beta = await store.insert(_user("beta"))

    with pytest.raises(DuplicateKey):
        await store.update(beta.id, {"name": "alpha"})

    assert (await store.get(beta.id)).name == "beta"


@pytest.mark.asyncio
async def test_document_owner_cannot_be_updated(session_factory):
    store = DocumentStore(session_factory)
    doc = await store.insert(Document(owner="owner-1", title="t"))

    with pytest.raises(ForbiddenFieldUpdate):
        await store.update(doc.id, {"owner": "owner-2", "title": "changed"})

    unchanged = await store.get(doc.id)
    assert unchanged.owner == "owner-1"
    assert unchanged.title == "t"


@pytest.mark.asyncio
async def test_id_cannot_be_updated_and_unknown_fields_rejected(session_factory):
    store = StructureStore(session_factory)
    structure = await store.insert(Structure(name="s"))

    with pytest.raises(ForbiddenFieldUpdate):
        await store.update(structure.id, {"id": "other"})
    with pytest.raises(ValidationError):
        await store.update(structure.id, {"colour": "red"})


@pytest.mark.asyncio
async def test_remove_by_filter_returns_count(session_factory):
    store = DocumentStore(session_factory)
    await store.insert(Document(owner="o1", title="a"))
    await store.insert(Document(owner="o1", title="b"))
    await store.insert(Document(owner="o2", title="c"))

    assert await store.remove({"owner": "o1"}) == 2
    assert await store.remove({"owner": "o1"}) == 0
    assert [d.title for d in await store.query()] == ["c"]


@pytest.mark.asyncio
async def test_opaque_payloads_round_trip(session_factory):
    store = StructureStore(session_factory)
    fields = [{"name": "b", "type": "int"}, {"name": "a", "type": "text", "required": True}]

    stored = await store.insert(Structure(name="s", fields=fields, reference={"x": [1, 2]}))

    loaded = await store.get(stored.id)
    assert loaded.fields == fields
    assert loaded.field_names() == ["b", "a"]
    assert loaded.reference == {"x": [1, 2]}


@pytest.mark.asyncio
async def test_insert_owned_requires_existing_owner(session_factory):
    users = UserStore(session_factory)
    documents = DocumentStore(session_factory)
    owner = await users.insert(_user("owner"))

    stored = await documents.insert_owned(
        Document(owner=owner.id, title="kept", content={"rows": [1, 2]})
    )
    assert stored.id and stored.owner == owner.id
    assert stored.content == {"rows": [1, 2]}
    assert stored.created_at is not None

    assert await documents.insert_owned(Document(owner="missing", title="lost")) is None
    assert [d.title for d in await documents.query()] == ["kept"]


@pytest.mark.asyncio
async def test_remove_unreferenced_keeps_users_with_documents(session_factory):
    users = UserStore(session_factory)
    documents = DocumentStore(session_factory)
    busy = await users.insert(_user("busy"))
    idle = await users.insert(_user("idle"))
    await documents.insert(Document(owner=busy.id, title="t"))

    assert await users.remove_unreferenced(busy.id) == 0
    assert await users.get(busy.id) is not None

    assert await users.remove_unreferenced(idle.id) == 1
    assert await users.get(idle.id) is None
    assert await users.remove_unreferenced("missing") == 0


@pytest.mark.asyncio
async def test_insert_if_empty_inserts_once(session_factory):
    store = StructureStore(session_factory)

    results = await asyncio.gather(
        store.insert_if_empty(Structure(name="first")),
        store.insert_if_empty(Structure(name="second")),
    )

    assert sum(r is not None for r in results) == 1
    assert await store.count() == 1
    assert await store.insert_if_empty(Structure(name="third")) is None


@pytest.mark.asyncio
async def test_compact_runs_on_sqlite(session_factory):
    store = DocumentStore(session_factory)
    doc = await store.insert(Document(owner="o", title="t", content={"big": "x" * 1000}))
    await store.remove({"id": doc.id})

    await store.compact()

    assert await store.count() == 0


@pytest.mark.asyncio
async def test_storage_errors_surface_as_storage_fault(tmp_path):
    # таблицы не созданы
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    store = UserStore(make_session_factory(engine))
    try:
        with pytest.raises(StorageFault):
            await store.count()
        with pytest.raises(StorageFault):
            await store.insert(_user("alpha"))
    finally:
        await engine.dispose()
