from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Structure:
    """Шаблон структуры документа. Описательный: содержимое документов по нему не проверяется"""

    name: str
    description: str = ""
    fields: List[Dict[str, Any]] = field(default_factory=list)
    reference: Any = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def field_names(self) -> List[str]:
        """Имена полей в порядке объявления"""
        return [f.get("name") for f in self.fields]

    def __repr__(self) -> str:
        return f"Structure(id={self.id}, name={self.name}, fields={len(self.fields)})"
