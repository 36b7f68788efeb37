"""Базовое хранилище одной коллекции.

Каждая операция выполняется в отдельной транзакции и либо применяется
целиком, либо не применяется вовсе. Уникальность обеспечивается индексом
в базе, поэтому проверка и вставка - один шаг. Записи в одну коллекцию
внутри процесса дополнительно выполняются по очереди.
"""
import asyncio
import dataclasses
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, FrozenSet, Generic, List, Mapping, Optional, Tuple, TypeVar

from sqlalchemy import delete, func, insert, literal, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.core.errors import DuplicateKey, ForbiddenFieldUpdate, StorageFault, ValidationError
from app.db.base import generate_id, utcnow

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")

# значения этих типов в фильтре означают "одно из"
SET_FILTER_TYPES = (list, tuple, set, frozenset)


class EntityStore(Generic[EntityT]):
    """Хранилище однородных сущностей"""

    model: Any = None
    entity: Any = None
    collection: str = ""
    unique_fields: Tuple[str, ...] = ()
    immutable_fields: FrozenSet[str] = frozenset({"id"})
    filterable_fields: FrozenSet[str] = frozenset({"id"})

    SYSTEM_FIELDS = frozenset({"id", "created_at", "updated_at"})

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory
        self._write_lock = asyncio.Lock()

    @asynccontextmanager
    async def _transaction(self):
        """Сессия с транзакцией; ошибки SQLAlchemy переводятся в ошибки хранилища"""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except IntegrityError as e:
            field = self._violated_unique_field(e)
            if field is None:
                logger.error(f"Integrity error in {self.collection}: {e}")
                raise StorageFault(f"{self.collection}: integrity error") from e
            raise DuplicateKey(self.collection, field) from e
        except SQLAlchemyError as e:
            logger.error(f"Storage error in {self.collection}: {e}")
            raise StorageFault(f"{self.collection}: storage error") from e

    def _violated_unique_field(self, error: IntegrityError) -> Optional[str]:
        message = str(error.orig).lower()
        if "unique" not in message and "duplicate" not in message:
            return None
        for field in self.unique_fields:
            if field in message:
                return field
        return self.unique_fields[0] if self.unique_fields else None

    def _conditions(self, filter: Optional[Mapping[str, Any]]) -> List[Any]:
        conditions = []
        for field, value in (filter or {}).items():
            if field not in self.filterable_fields:
                raise ValidationError(f"{self.collection}: field '{field}' cannot be queried")
            column = getattr(self.model, field)
            if isinstance(value, SET_FILTER_TYPES):
                conditions.append(column.in_(list(value)))
            else:
                conditions.append(column == value)
        return conditions

    def _check_fields(self, fields: Mapping[str, Any]) -> None:
        forbidden = set(fields) & self.immutable_fields
        if forbidden:
            raise ForbiddenFieldUpdate(forbidden)
        columns = set(self.model.__table__.columns.keys()) - self.SYSTEM_FIELDS
        unknown = set(fields) - columns
        if unknown:
            raise ValidationError(f"{self.collection}: unknown fields {', '.join(sorted(unknown))}")

    async def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        """Количество сущностей, подходящих под фильтр"""
        stmt = select(func.count()).select_from(self.model).where(*self._conditions(filter))
        async with self._transaction() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def insert(self, entity: EntityT) -> EntityT:
        """Вставка сущности; идентификатор назначает хранилище"""
        values = self._to_row(entity)
        async with self._write_lock:
            async with self._transaction() as session:
                db_entity = self.model(**values)
                session.add(db_entity)
                await session.flush()
                stored = self._to_domain(db_entity)
        logger.debug(f"Inserted into {self.collection}: {stored.id}")
        return stored

    async def insert_where(self, entity: EntityT, condition: Any) -> Optional[EntityT]:
        """Вставка, если условие истинно в момент записи.

        Условие проверяется той же инструкцией INSERT ... SELECT, что и вставка.
        Возвращает None, если условие не выполнено.
        """
        values = self._new_row(entity)
        table = self.model.__table__
        source = select(
            *[literal(value, type_=table.c[name].type) for name, value in values.items()]
        ).where(condition)
        stmt = insert(table).from_select(list(values), source)

        async with self._write_lock:
            async with self._transaction() as session:
                await self._before_conditional_insert(session, entity)
                result = await session.execute(stmt)
                if result.rowcount == 0:
                    return None
                db_entity = await session.get(self.model, values["id"])
                stored = self._to_domain(db_entity)
        logger.debug(f"Inserted into {self.collection}: {stored.id}")
        return stored

    async def insert_if_empty(self, entity: EntityT) -> Optional[EntityT]:
        """Вставка, только если коллекция пуста"""
        return await self.insert_where(entity, ~select(self.model.id).exists())

    async def _before_conditional_insert(self, session: Any, entity: EntityT) -> None:
        """Точка расширения: блокировки, нужные условию вставки"""

    async def query(self, filter: Optional[Mapping[str, Any]] = None) -> List[EntityT]:
        """Поиск сущностей; пустой список, если ничего не найдено"""
        stmt = (
            select(self.model)
            .where(*self._conditions(filter))
            .order_by(self.model.created_at, self.model.id)
        )
        async with self._transaction() as session:
            result = await session.execute(stmt)
            return [self._to_domain(row) for row in result.scalars().all()]

    async def get(self, entity_id: str) -> Optional[EntityT]:
        """Получение сущности по идентификатору"""
        found = await self.query({"id": entity_id})
        return found[0] if found else None

    async def update(self, entity_id: str, fields: Mapping[str, Any]) -> int:
        """Частичное обновление; возвращает число измененных сущностей"""
        self._check_fields(fields)
        if not fields:
            return await self.count({"id": entity_id})

        stmt = update(self.model).where(self.model.id == entity_id).values(**dict(fields))
        async with self._write_lock:
            async with self._transaction() as session:
                result = await session.execute(stmt)
                return result.rowcount

    async def remove(self, filter: Mapping[str, Any]) -> int:
        """Удаление сущностей по фильтру; возвращает число удаленных"""
        stmt = delete(self.model).where(*self._conditions(filter))
        async with self._write_lock:
            async with self._transaction() as session:
                result = await session.execute(stmt)
                return result.rowcount

    async def compact(self) -> None:
        """Освобождение места, занятого удаленными записями"""
        async with self._write_lock:
            try:
                async with self._session_factory() as session:
                    conn = await session.connection(
                        execution_options={"isolation_level": "AUTOCOMMIT"}
                    )
                    if conn.dialect.name == "sqlite":
                        # SQLite сжимает файл базы целиком
                        await conn.execute(text("VACUUM"))
                    elif conn.dialect.name == "postgresql":
                        await conn.execute(text(f"VACUUM {self.model.__tablename__}"))
                    else:
                        logger.debug(f"Compaction is not supported for {conn.dialect.name}")
                        return
            except SQLAlchemyError as e:
                logger.error(f"Compaction of {self.collection} failed: {e}")
                raise StorageFault(f"{self.collection}: compaction failed") from e
        logger.info(f"Compacted {self.collection}")

    def _to_row(self, entity: EntityT) -> Dict[str, Any]:
        """Преобразование доменной сущности в значения колонок"""
        values = dataclasses.asdict(entity)
        for name in self.SYSTEM_FIELDS:
            values.pop(name, None)
        return values

    def _new_row(self, entity: EntityT) -> Dict[str, Any]:
        """Значения колонок новой записи вместе с системными полями"""
        now = utcnow()
        values = {"id": generate_id(), "created_at": now, "updated_at": now}
        values.update(self._to_row(entity))
        return values

    def _to_domain(self, db_entity: Any) -> EntityT:
        """Преобразование модели БД в доменную сущность"""
        names = [f.name for f in dataclasses.fields(self.entity)]
        return self.entity(**{name: getattr(db_entity, name) for name in names})
