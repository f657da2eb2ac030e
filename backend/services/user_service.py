# backend/services/user_service.py
import asyncio
import logging
from typing import Any

from backend import config
from backend.errors import NotFound, Unauthorized, ValidationFailure
from backend.models.user import SECRET_COLUMN, redact
from backend.services.auth_service import (
    create_access_token,
    hash_password,
    verify_password,
)
from backend.services.user_store import CONFIRM_FIELD, UserStore

logger = logging.getLogger("backend.usuarios")


class UserService:
    """Request-scoped orchestration of validation, hashing, store calls and redaction.

    Every method either returns the JSON-ready response body or raises a
    `UsuariosError` subclass; the HTTP layer maps those to status codes.
    """

    def __init__(self, store: UserStore, bcrypt_rounds: int = config.BCRYPT_ROUNDS):
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, datos: dict[str, Any]) -> dict:
        if datos.get(SECRET_COLUMN) != datos.get(CONFIRM_FIELD):
            raise ValidationFailure()

        fields = {key: value for key, value in datos.items() if key != CONFIRM_FIELD}
        fields[SECRET_COLUMN] = await self._hash(datos[SECRET_COLUMN])

        user_id = await self.store.create(fields)
        logger.info(f"Usuario registrado con id {user_id}")
        return {"message": "Usuario registrado correctamente", "id": user_id}

    async def login(self, correo: str, contrasena: str) -> dict:
        usuario = await self.store.find_by_email(correo)
        if usuario is None:
            raise Unauthorized()

        coinciden = await self._run(verify_password, contrasena, usuario[SECRET_COLUMN])
        if not coinciden:
            raise Unauthorized()

        logger.info(f"Inicio de sesión exitoso para el usuario {usuario['id']}")
        return {
            "message": "Inicio de sesión exitoso",
            "user": {"id": usuario["id"], "nombre": usuario["nombre"], "correo": usuario["correo"]},
            "token": create_access_token(usuario["id"]),
        }

    async def list_all(self) -> list[dict]:
        return [redact(row) for row in await self.store.list_all()]

    async def get_by_id(self, user_id: int) -> dict:
        usuario = await self.store.find_by_id(user_id)
        if usuario is None:
            raise NotFound()
        return redact(usuario)

    async def update(self, user_id: int, datos: dict[str, Any]) -> dict:
        fields = dict(datos)
        if fields.get(SECRET_COLUMN) is not None:
            if fields[SECRET_COLUMN] != fields.get(CONFIRM_FIELD):
                raise ValidationFailure()
            fields[SECRET_COLUMN] = await self._hash(fields[SECRET_COLUMN])
        fields.pop(CONFIRM_FIELD, None)

        # Existence first, so "no such id" and "values unchanged" are not confused
        if await self.store.find_by_id(user_id) is None:
            raise NotFound()
        if not fields:
            raise NotFound("Usuario no encontrado o no se realizaron cambios.")

        # Row may have been deleted since the existence check
        if await self.store.update_partial(user_id, fields) == 0:
            raise NotFound()
        logger.info(f"Usuario {user_id} actualizado: {sorted(k for k in fields if k != SECRET_COLUMN)}")
        return {"message": "Usuario actualizado correctamente"}

    async def delete(self, user_id: int) -> dict:
        if await self.store.delete(user_id) == 0:
            raise NotFound("Usuario no encontrado para eliminar.")
        logger.info(f"Usuario {user_id} eliminado")
        return {"message": "Usuario eliminado correctamente"}

    # ---------------------- HELPERS ----------------------
    async def _hash(self, contrasena: str) -> str:
        return await self._run(hash_password, contrasena, self.bcrypt_rounds)

    @staticmethod
    async def _run(func, *args):
        # bcrypt is CPU bound; keep it off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)
