from app.db.models.structure import Structure as StructureModel
from app.db.repositories.base import EntityStore
from app.domains.structures.entities import Structure


class StructureStore(EntityStore[Structure]):
    """Хранилище шаблонов структур"""

    model = StructureModel
    entity = Structure
    collection = "structures"
    unique_fields = ("name",)
    filterable_fields = frozenset({"id", "name"})
