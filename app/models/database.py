import logging
import os
from sqlmodel import SQLModel, create_engine, Session
from app.utils.getenv import get_bool_env

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./inventario.db")

# SQLAlchemy exige el esquema `postgresql://`
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# Solo SQLite necesita compartir la conexión entre hilos del threadpool de FastAPI
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL, echo=get_bool_env("DB_ECHO"), connect_args=connect_args
)


def get_db():
    """Obtiene una sesión de la base de datos."""
    with Session(engine) as session:
        yield session


def create_db_and_tables():
    # Los modelos deben estar importados para registrarse en SQLModel.metadata
    from app.models import alert, movement, product, stock_request, supplier, user  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Tablas verificadas en %s", engine.url.render_as_string(hide_password=True))
