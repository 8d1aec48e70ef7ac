# Autenticación de la API: tokens JWT firmados (HS256) y hash de contraseñas con bcrypt.
# https://fastapi.tiangolo.com/tutorial/security/oauth2-jwt/
from datetime import (
    datetime,
    timedelta,
    timezone,
)  # Para manejar fechas y la expiración de los tokens.
from app.utils.getenv import get_required_env
from fastapi import HTTPException, status
from passlib.context import (
    CryptContext,
)  # Para cifrar y verificar contraseñas con bcrypt.
import jwt  # Para crear y decodificar tokens JWT.
import os  # Para acceder a variables de entorno.

# Clave secreta para firmar JWT
SECRET_KEY = get_required_env("SECRET_KEY")

# Algoritmo de firma JWT
ALGORITHM = "HS256"

# Tiempo de expiración del token (minutos)
ACCESS_TOKEN_DURATION = int(os.getenv("ACCESS_TOKEN_DURATION", 24 * 60))  # 1 día

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Genera un hash seguro para la contraseña."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica si la contraseña ingresada coincide con la almacenada."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Crea un token de acceso JWT con tiempo de expiración."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_DURATION)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


"""
data → id del usuario (`sub`) y su rol (`role`).
Se copia data y se añade la fecha de expiración (exp).
El rol viaja firmado: los endpoints que modifican datos lo comprueban en cada petición.
"""


def decode_access_token(token: str) -> dict:
    """Decodifica un token JWT y retorna los datos o lanza una excepción si es inválido."""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expirado"
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido"
        )
