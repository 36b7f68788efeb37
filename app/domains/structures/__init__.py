from app.domains.structures.entities import Structure
from app.domains.structures.schemas import (
    StructureField, StructureCreate, StructureUpdate, StructureResponse
)

__all__ = [
    "Structure",
    "StructureField", "StructureCreate", "StructureUpdate", "StructureResponse"
]
