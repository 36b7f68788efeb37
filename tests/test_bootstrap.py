import asyncio

import pytest

from app.domains.documents.entities import Document
from app.domains.identity.entities import User
from app.domains.repository import Repository


@pytest.mark.asyncio
async def test_bootstrap_populates_empty_collections(bare_repository):
    await bare_repository.bootstrap(admin_name="admin", admin_password="adminSecret")

    admins = await bare_repository.user_store.query()
    assert [(u.name, u.is_admin) for u in admins] == [("admin", True)]
    assert admins[0].authenticate("adminSecret")

    documents = await bare_repository.document_store.query()
    assert len(documents) == 1
    assert documents[0].owner == admins[0].id

    assert await bare_repository.structure_store.count() == 1


@pytest.mark.asyncio
async def test_bootstrap_is_idempotent(bare_repository):
    await bare_repository.bootstrap()
    await bare_repository.bootstrap()

    assert await bare_repository.user_store.count() == 1
    assert await bare_repository.document_store.count() == 1
    assert await bare_repository.structure_store.count() == 1


@pytest.mark.asyncio
async def test_each_step_is_gated_on_its_own_collection(bare_repository):
    existing = await bare_repository.user_store.insert(
        User(name="root", password_hash="x" * 60, is_admin=True)
    )
    await bare_repository.document_store.insert(Document(owner=existing.id, title="kept"))

    await bare_repository.bootstrap()

    assert [u.name for u in await bare_repository.user_store.query()] == ["root"]
    assert [d.title for d in await bare_repository.document_store.query()] == ["kept"]
    assert await bare_repository.structure_store.count() == 1


@pytest.mark.asyncio
async def test_demo_document_goes_to_an_existing_admin(bare_repository):
    existing = await bare_repository.user_store.insert(
        User(name="root", password_hash="x" * 60, is_admin=True)
    )

    await bare_repository.bootstrap()

    documents = await bare_repository.document_store.query()
    assert [d.owner for d in documents] == [existing.id]


@pytest.mark.asyncio
async def test_demo_document_skipped_without_admin(bare_repository):
    await bare_repository.user_store.insert(User(name="plain", password_hash="x" * 60))

    await bare_repository.bootstrap()

    assert await bare_repository.document_store.count() == 0
    assert await bare_repository.structure_store.count() == 1


@pytest.mark.asyncio
async def test_concurrent_bootstraps_do_not_duplicate(bare_repository):
    await asyncio.gather(bare_repository.bootstrap(), bare_repository.bootstrap())

    assert await bare_repository.user_store.count() == 1
    assert await bare_repository.document_store.count() == 1
    assert await bare_repository.structure_store.count() == 1


@pytest.mark.asyncio
async def test_bootstraps_over_shared_database_do_not_duplicate(session_factory):
    first, second = Repository(session_factory), Repository(session_factory)

    await asyncio.gather(first.bootstrap(), second.bootstrap())

    assert await first.user_store.count() == 1
    assert await first.document_store.count() == 1
    assert await first.structure_store.count() == 1
