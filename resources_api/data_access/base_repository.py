import logging
from typing import Any, Generic, Type, TypeVar, Optional, Protocol

from fastcrud import FastCRUD
from pydantic import BaseModel
from sqlalchemy import delete, inspect, select
from sqlalchemy.exc import DBAPIError, InvalidRequestError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from resources_api.core.exceptions import ConcurrencyError, StorageError

logger = logging.getLogger(__name__)

class SQLAlchemyModel(Protocol):
    id: Any

ModelType = TypeVar("ModelType", bound=SQLAlchemyModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)

class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    # Columns that a partial update never writes
    immutable_fields: tuple[str, ...] = ("id",)

    def __init__(self, model: Type[ModelType]):
        """
        Base class for data access repositories.
        Works as a unit of work over the request's session: reads go
        straight to the database, writes are staged on the session and
        persisted by `commit`. Driver exceptions are translated into
        StorageError / ConcurrencyError.
        """
        self.model = model
        self.crud = FastCRUD(model)

    async def probe(self, db: AsyncSession) -> bool:
        """Cheap existence query, used to surface connectivity failures early."""
        try:
            return await self.crud.exists(db=db)
        except DBAPIError as e:
            raise self._storage_error(e) from e

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        try:
            return await db.get(self.model, id)
        except DBAPIError as e:
            raise self._storage_error(e) from e

    async def get_all(self, db: AsyncSession) -> list[ModelType]:
        stmt = select(self.model).order_by(self.model.id.asc())
        try:
            result = await db.execute(stmt)
        except DBAPIError as e:
            raise self._storage_error(e) from e
        return list(result.scalars().all())

    def add(self, db: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        db_obj = self.model(**obj_in.model_dump())
        db.add(db_obj)
        return db_obj

    def merge(self, db_obj: ModelType, obj_in: UpdateSchemaType | dict[str, Any]) -> list[str]:
        """
        Copy the supplied, non-null values of `obj_in` onto `db_obj`.

        Only columns whose value actually differs are assigned, so the ORM
        writes just those columns on flush. Returns the changed column names.
        """
        if isinstance(obj_in, dict):
            update_data = {k: v for k, v in obj_in.items() if v is not None}
        else:
            update_data = obj_in.model_dump(exclude_unset=True, exclude_none=True)

        changed = []
        for column in inspect(self.model).column_attrs:
            field = column.key
            if field in self.immutable_fields or field not in update_data:
                continue
            value = update_data[field]
            if getattr(db_obj, field) != value:
                setattr(db_obj, field, value)
                changed.append(field)
        return changed

    async def remove(self, db: AsyncSession, *, db_obj: ModelType) -> ModelType:
        """Delete the row of `db_obj`; a row already gone is a concurrency conflict."""
        stmt = delete(self.model).where(self.model.id == db_obj.id)
        try:
            result = await db.execute(stmt)
        except DBAPIError as e:
            await db.rollback()
            raise self._storage_error(e) from e
        if result.rowcount == 0:
            await db.rollback()
            raise self._concurrency_error(
                f"DELETE statement on table '{self.model.__tablename__}' expected to delete 1 row(s); 0 were matched."
            )
        return db_obj

    async def refresh(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        try:
            await db.refresh(db_obj)
        except DBAPIError as e:
            raise self._storage_error(e) from e
        except InvalidRequestError as e:
            # the row was deleted after it was read
            raise self._concurrency_error(str(e)) from e
        return db_obj

    async def commit(self, db: AsyncSession) -> None:
        try:
            await db.commit()
        except StaleDataError as e:
            await db.rollback()
            raise self._concurrency_error(str(e)) from e
        except DBAPIError as e:
            await db.rollback()
            raise self._storage_error(e) from e

    def _storage_error(self, exc: DBAPIError) -> StorageError:
        error = StorageError.from_dbapi(exc)
        logger.error(f"Storage error on {self.model.__tablename__}: {error.message}")
        return error

    def _concurrency_error(self, detail: str) -> ConcurrencyError:
        logger.warning(f"Concurrent write detected on {self.model.__tablename__}: {detail}")
        return ConcurrencyError(detail)
