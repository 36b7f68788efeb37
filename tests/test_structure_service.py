import pytest

from app.core.errors import DuplicateKey, Forbidden, NotFound, ValidationError
from app.domains.structures.schemas import StructureCreate, StructureUpdate

INVOICE = {
    "name": "Invoice",
    "description": "billing document",
    "fields": [
        {"name": "number", "type": "string"},
        {"name": "amount", "type": "number", "min": 0},
    ],
}


@pytest.mark.asyncio
async def test_admin_creates_structure_and_everyone_reads_it(repository, admin, alice):
    created = await repository.structures.create_structure(StructureCreate(**INVOICE), admin.id)

    fetched = await repository.structures.get_structure(created.id)
    assert fetched.name == "Invoice"
    assert fetched.field_names() == ["number", "amount"]
    assert fetched.fields[1]["min"] == 0

    names = {s.name for s in await repository.structures.list_structures()}
    assert "Invoice" in names


@pytest.mark.asyncio
async def test_non_admin_cannot_modify_structures(repository, admin, alice):
    with pytest.raises(Forbidden):
        await repository.structures.create_structure(StructureCreate(**INVOICE), alice.id)

    created = await repository.structures.create_structure(StructureCreate(**INVOICE), admin.id)

    with pytest.raises(Forbidden):
        await repository.structures.update_structure(
            created.id, StructureUpdate(description="x"), alice.id
        )
    with pytest.raises(Forbidden):
        await repository.structures.remove_structure(created.id, alice.id)


@pytest.mark.asyncio
async def test_structure_names_are_unique(repository, admin):
    first = await repository.structures.create_structure(StructureCreate(**INVOICE), admin.id)
    other = await repository.structures.create_structure(StructureCreate(name="Receipt"), admin.id)

    with pytest.raises(DuplicateKey):
        await repository.structures.create_structure(StructureCreate(**INVOICE), admin.id)
    with pytest.raises(DuplicateKey):
        await repository.structures.update_structure(other.id, StructureUpdate(name="Invoice"), admin.id)

    assert (await repository.structures.get_structure(first.id)).name == "Invoice"


@pytest.mark.asyncio
async def test_update_and_remove_structure(repository, admin):
    created = await repository.structures.create_structure(StructureCreate(**INVOICE), admin.id)

    updated = await repository.structures.update_structure(
        created.id,
        StructureUpdate(fields=[{"name": "total", "type": "number"}]),
        admin.id,
    )
    assert updated.fields == [{"name": "total", "type": "number"}]
    assert updated.description == "billing document"

    with pytest.raises(ValidationError):
        await repository.structures.update_structure(created.id, StructureUpdate(fields=None), admin.id)

    await repository.structures.remove_structure(created.id, admin.id)
    with pytest.raises(NotFound):
        await repository.structures.get_structure(created.id)
