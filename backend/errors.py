# backend/errors.py
from fastapi import status


class UsuariosError(Exception):
    """Base error. Carries the HTTP status and a message that is safe to show clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Error interno del servidor."

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationFailure(UsuariosError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Las contraseñas no coinciden"


class Unauthorized(UsuariosError):
    # Same message for unknown email and wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Credenciales inválidas (correo o contraseña)."


class NotFound(UsuariosError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Usuario no encontrado."


class DuplicateKey(UsuariosError):
    status_code = status.HTTP_409_CONFLICT
    detail = "El correo o la cédula ya están registrados."


class StoreUnavailable(UsuariosError):
    detail = "Error en el servidor al acceder a la base de datos."


class HashingFailure(UsuariosError):
    detail = "Error interno de servidor al encriptar."
