# backend/routers/usuarios.py
import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import AfterValidator, AliasChoices, BaseModel, Field
from pydantic.networks import validate_email

from backend.deps import get_user_service
from backend.services.user_service import UserService

router = APIRouter(prefix="/api/usuarios", tags=["usuarios"])

logger = logging.getLogger("backend.usuarios")


# ---------------------- MODELS ----------------------
def validar_correo(value: str) -> str:
    """Reject malformed addresses but keep the address exactly as submitted."""
    validate_email(value)
    return value


# Lengths match the `usuarios` columns
Nombre = Annotated[str, Field(max_length=100)]
Documento = Annotated[str, Field(max_length=20)]
Correo = Annotated[str, Field(max_length=255), AfterValidator(validar_correo)]


# Column names are the canonical keys; the English names are accepted too.
class RegistroIn(BaseModel):
    nombre: Nombre = Field(validation_alias=AliasChoices("nombre", "name"))
    apellido: Nombre = Field(validation_alias=AliasChoices("apellido", "lastName"))
    cedula: Documento = Field(validation_alias=AliasChoices("cedula", "nationalId"))
    telefono: Documento = Field(validation_alias=AliasChoices("telefono", "phone"))
    correo: Correo = Field(validation_alias=AliasChoices("correo", "email"))
    contrasena: str = Field(validation_alias=AliasChoices("contraseña", "secret"))
    confirmar: str | None = Field(default=None, validation_alias=AliasChoices("confirmar", "confirmSecret"))

    def to_datos(self) -> dict:
        datos = self.model_dump(exclude={"contrasena"})
        datos["contraseña"] = self.contrasena
        return datos


class LoginIn(BaseModel):
    # Plain str: a malformed address must fail the same way as an unknown one
    correo: str = Field(validation_alias=AliasChoices("correo", "email"))
    contrasena: str = Field(validation_alias=AliasChoices("contraseña", "secret"))


class ActualizarIn(BaseModel):
    nombre: Nombre | None = Field(default=None, validation_alias=AliasChoices("nombre", "name"))
    apellido: Nombre | None = Field(default=None, validation_alias=AliasChoices("apellido", "lastName"))
    cedula: Documento | None = Field(default=None, validation_alias=AliasChoices("cedula", "nationalId"))
    telefono: Documento | None = Field(default=None, validation_alias=AliasChoices("telefono", "phone"))
    correo: Correo | None = Field(default=None, validation_alias=AliasChoices("correo", "email"))
    contrasena: str | None = Field(default=None, validation_alias=AliasChoices("contraseña", "secret"))
    confirmar: str | None = Field(default=None, validation_alias=AliasChoices("confirmar", "confirmSecret"))

    def to_datos(self) -> dict:
        datos = self.model_dump(exclude={"contrasena"}, exclude_none=True)
        if self.contrasena is not None:
            datos["contraseña"] = self.contrasena
        return datos


# ---------------------- ROUTES ----------------------
@router.post("/registro")
async def registrar_usuario(payload: RegistroIn, service: UserService = Depends(get_user_service)):
    logger.info(f"POST /registro received for email: {payload.correo}")
    return await service.register(payload.to_datos())


@router.post("/login")
async def iniciar_sesion(payload: LoginIn, service: UserService = Depends(get_user_service)):
    logger.info(f"POST /login received for email: {payload.correo}")
    return await service.login(payload.correo, payload.contrasena)


@router.get("")
async def obtener_usuarios(service: UserService = Depends(get_user_service)):
    return await service.list_all()


@router.get("/{user_id}")
async def obtener_usuario_por_id(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get_by_id(user_id)


@router.put("/{user_id}")
async def actualizar_usuario(user_id: int, payload: ActualizarIn, service: UserService = Depends(get_user_service)):
    logger.info(f"PUT /api/usuarios/{user_id}")
    return await service.update(user_id, payload.to_datos())


@router.delete("/{user_id}")
async def eliminar_usuario(user_id: int, service: UserService = Depends(get_user_service)):
    logger.info(f"DELETE /api/usuarios/{user_id}")
    return await service.delete(user_id)
