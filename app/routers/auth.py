"""
Este archivo maneja la autenticación de usuarios en la API, incluyendo:
- Registro de usuarios (/auth/register) → Guarda nuevos usuarios en la BD con contraseñas encriptadas.
- Inicio de sesión (/auth/login) → Verifica credenciales y devuelve un token JWT.
- Datos del usuario autenticado (/auth/me) → Usa el token JWT para devolver los datos del usuario.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from app.errors import Conflict, StoreUnavailable
from app.models.database import get_db
from app.models.user import User
from app.schemas.user import LoginRequest, TokenResponse, UserCreate, UserResponse
from app.utils.authentication import (
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Autenticación"])

# Lee el token del header `Authorization: Bearer <token>`
oauth2 = OAuth2PasswordBearer(tokenUrl="/auth/login")
# En el registro el token es opcional: solo hace falta para crear admins y managers
oauth2_optional = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


### REGISTRO DE USUARIO ###
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    token: Optional[str] = Depends(oauth2_optional),
    db: Session = Depends(get_db),
):
    """
    Registra un nuevo usuario con contraseña encriptada.
    Cualquiera puede registrarse como `employee`; los demás roles los asigna un admin.
    """
    if user_data.role != "employee":
        claims = decode_access_token(token) if token else {}
        if claims.get("role") != "admin":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Solo un administrador puede registrar usuarios admin o manager.",
            )

    try:
        statement = select(User).where(
            (User.username == user_data.username) | (User.email == user_data.email)
        )
        existing_user = db.exec(statement).first()
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")

    if existing_user:
        raise Conflict("El usuario o el correo ya están registrados.")

    new_user = User(
        username=user_data.username,
        email=user_data.email,
        password=hash_password(user_data.password),
        role=user_data.role,
    )

    try:
        db.add(new_user)
        db.commit()  # confirma todas las transacciones realizadas en la sesión actual
    except IntegrityError:
        db.rollback()  # Deshacer cualquier cambio no commiteado en la transacción
        raise Conflict("El usuario o el correo ya están registrados.")
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno del servidor al registrar el usuario.")

    logger.info("Usuario %s registrado con rol %s", new_user.username, new_user.role)
    return {"message": "Usuario registrado"}


### LOGIN DE USUARIO ###
@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Autentica al usuario y genera un token JWT válido durante un día."""
    try:
        statement = select(User).where(User.username == credentials.username)
        user = db.exec(statement).first()
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")

    # Mismo mensaje para usuario inexistente y contraseña incorrecta
    if not user or not verify_password(credentials.password, user.password):
        logger.warning("Intento de login fallido para %s", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario o contraseña incorrectos",
        )
    if not user.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="El usuario está inactivo. Contacta al administrador para activarlo.",
        )

    token = create_access_token({"sub": str(user.id), "role": user.role})

    return {
        "token": token,
        "token_type": "bearer",
        "user": {"id": user.id, "username": user.username, "role": user.role},
    }


### OBTENER DATOS DEL USUARIO AUTENTICADO ###
def get_token_claims(token: str = Depends(oauth2)) -> dict:
    """Claims firmados del token (`sub`, `role`, `exp`)."""
    return decode_access_token(token)


def get_current_user(
    claims: dict = Depends(get_token_claims), db: Session = Depends(get_db)
) -> User:
    """Obtiene el usuario actual a partir del token JWT."""
    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido"
        )

    # Verificar si el usuario sigue existiendo en la base de datos
    try:
        user = db.get(User, int(user_id))
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido"
        )
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario no encontrado o eliminado",
        )
    if not user.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="El usuario está inactivo. Contacta al administrador para activarlo.",
        )

    return user


@router.get("/me", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)):
    """Retorna los datos del usuario autenticado."""
    return user
