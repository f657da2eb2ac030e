# backend/models/user.py
import enum

import sqlalchemy as sa
from backend.utils.database import Base

# Column holding the bcrypt hash. Never returned to clients.
SECRET_COLUMN = "contraseña"

usuarios = sa.Table(
    "usuarios",
    Base.metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("nombre", sa.String(100), nullable=False),
    sa.Column("apellido", sa.String(100), nullable=False),
    sa.Column("cedula", sa.String(20), nullable=False, unique=True),
    sa.Column("telefono", sa.String(20), nullable=False),
    sa.Column("correo", sa.String(255), nullable=False, unique=True, index=True),
    sa.Column(SECRET_COLUMN, sa.String(255), nullable=False),
)


class UpdatableField(str, enum.Enum):
    """Columns a partial update is allowed to touch."""

    NOMBRE = "nombre"
    APELLIDO = "apellido"
    CEDULA = "cedula"
    TELEFONO = "telefono"
    CORREO = "correo"
    CONTRASENA = SECRET_COLUMN


def redact(row) -> dict:
    """Copy a row into a plain dict without the password hash."""
    return {key: value for key, value in dict(row).items() if key != SECRET_COLUMN}
