from typing import Literal
from pydantic import BaseModel, EmailStr, Field

Role = Literal["admin", "manager", "employee"]


class UserCreate(BaseModel):
    """
    Esquema para registrar usuarios.
    - `EmailStr` valida que el correo tenga formato correcto.
    - `password`: se exige un mínimo de 6 caracteres.
    - `role`: por defecto 'employee'. Los roles admin y manager solo los asigna un admin.
    """

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr = Field(..., max_length=100)
    password: str = Field(..., min_length=6, max_length=72)  # Límite de bcrypt
    role: Role = Field(default="employee", description="admin, manager o employee")


class LoginRequest(BaseModel):
    username: str
    password: str


class UserSummary(BaseModel):
    """Datos del usuario que acompañan al token."""

    id: int
    username: str
    role: str

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    """No incluye `password` por seguridad."""

    email: EmailStr
    active: bool


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserSummary
