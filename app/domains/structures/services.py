import logging
from typing import List, Optional, TYPE_CHECKING

from app.core.errors import NotFound, ValidationError
from app.domains.access import Action, assert_access, resolve_actor
from app.domains.structures.entities import Structure
from app.domains.structures.schemas import StructureCreate, StructureUpdate

if TYPE_CHECKING:
    from app.db.repositories.structure_repository import StructureStore
    from app.db.repositories.user_repository import UserStore

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = ("name", "description", "fields")


class StructureService:
    """Сервис для работы с шаблонами структур. Чтение открыто, изменение - только администратору"""

    def __init__(self, structures: "StructureStore", users: "UserStore"):
        self.structures = structures
        self.users = users

    async def list_structures(self) -> List[Structure]:
        return await self.structures.query()

    async def get_structure(self, structure_id: str) -> Structure:
        structure = await self.structures.get(structure_id)
        if structure is None:
            raise NotFound("Structure", structure_id)
        return structure

    async def create_structure(self, structure_data: StructureCreate, actor_id: Optional[str]) -> Structure:
        actor = await resolve_actor(self.users, actor_id)
        structure = Structure(
            name=structure_data.name,
            description=structure_data.description,
            fields=[f.model_dump() for f in structure_data.fields],
            reference=structure_data.reference
        )
        assert_access(actor, Action.CREATE, structure)

        created = await self.structures.insert(structure)
        logger.info(f"Created structure {created.name} ({created.id})")
        return created

    async def update_structure(
        self,
        structure_id: str,
        update_data: StructureUpdate,
        actor_id: Optional[str]
    ) -> Structure:
        actor = await resolve_actor(self.users, actor_id)
        structure = await self.get_structure(structure_id)
        assert_access(actor, Action.UPDATE, structure)

        changes = update_data.changes()
        for field in NON_NULLABLE_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null")

        if await self.structures.update(structure_id, changes) == 0:
            raise NotFound("Structure", structure_id)

        return await self.get_structure(structure_id)

    async def remove_structure(self, structure_id: str, actor_id: Optional[str]) -> None:
        actor = await resolve_actor(self.users, actor_id)
        structure = await self.get_structure(structure_id)
        assert_access(actor, Action.REMOVE, structure)

        if await self.structures.remove({"id": structure_id}) == 0:
            raise NotFound("Structure", structure_id)

        logger.info(f"Removed structure {structure_id}")
