# backend/services/user_store.py
import logging
from typing import Any, Mapping

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.errors import DuplicateKey, StoreUnavailable
from backend.models.user import UpdatableField, usuarios

logger = logging.getLogger("backend.user_store")

CONFIRM_FIELD = "confirmar"
INSERT_COLUMNS = [field.value for field in UpdatableField]


class UserStore:
    """One parameterized statement per operation against the `usuarios` table.

    Rows come back with the password hash included; callers redact.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, fields: Mapping[str, Any]) -> int:
        stmt = insert(usuarios).values({column: fields[column] for column in INSERT_COLUMNS})
        result = await self._write(stmt)
        return result.inserted_primary_key[0]

    async def list_all(self):
        result = await self._read(select(usuarios))
        return result.mappings().all()

    async def find_by_email(self, correo: str):
        result = await self._read(select(usuarios).where(usuarios.c.correo == correo))
        return result.mappings().first()

    async def find_by_id(self, user_id: int):
        result = await self._read(select(usuarios).where(usuarios.c.id == user_id))
        return result.mappings().first()

    async def update_partial(self, user_id: int, fields: Mapping[Any, Any]) -> int:
        values = {}
        for key, value in fields.items():
            if key == CONFIRM_FIELD:
                continue
            # ValueError for anything outside the allow-list
            column = UpdatableField(key)
            values[usuarios.c[column.value]] = value

        if not values:
            return 0

        stmt = update(usuarios).where(usuarios.c.id == user_id).values(values)
        result = await self._write(stmt)
        return result.rowcount

    async def delete(self, user_id: int) -> int:
        result = await self._write(delete(usuarios).where(usuarios.c.id == user_id))
        return result.rowcount

    # ---------------------- HELPERS ----------------------
    async def _read(self, stmt):
        try:
            return await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Query failed: {e}")
            raise StoreUnavailable() from e

    async def _write(self, stmt):
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
            return result
        except IntegrityError as e:
            await self.db.rollback()
            if not _is_unique_violation(e):
                logger.error(f"Integrity error on usuarios: {e.orig}")
                raise StoreUnavailable() from e
            logger.warning(f"Unique constraint violated on usuarios: {e.orig}")
            raise DuplicateKey() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Statement failed: {e}")
            raise StoreUnavailable() from e


def _is_unique_violation(error: IntegrityError) -> bool:
    # MySQL "Duplicate entry", PostgreSQL "duplicate key value", SQLite "UNIQUE constraint failed"
    message = str(error.orig).lower()
    return "duplicate" in message or "unique" in message
