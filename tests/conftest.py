import os

# Deben existir antes de importar la aplicación
os.environ.setdefault("SECRET_KEY", "clave-de-pruebas")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.main import app
from app.models.database import get_db
from app.models.product import Product
from app.models.supplier import Supplier
from app.models.user import User
from app.utils.authentication import create_access_token, hash_password

PASSWORD = "secreto123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    app.dependency_overrides[get_db] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def supplier(session):
    supplier = Supplier(
        name="Distribuidora Andina",
        contact_person="Rosa Quispe",
        email="ventas@andina.pe",
        phone="999888777",
    )
    session.add(supplier)
    session.commit()
    session.refresh(supplier)
    return supplier


@pytest.fixture
def make_product(session, supplier):
    counter = {"n": 0}

    def _make(**overrides) -> Product:
        counter["n"] += 1
        fields = {
            "name": f"Producto {counter['n']}",
            "sku": f"SKU-{counter['n']:03d}",
            "category": "Abarrotes",
            "price": 4.5,
            "stock": 50,
            "min_stock": 10,
            "max_stock": 200,
            "supplier_id": supplier.id,
            "unit": "unidad",
            "location": "A-01",
        }
        fields.update(overrides)
        product = Product(**fields)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make


@pytest.fixture
def make_user(session):
    counter = {"n": 0}

    def _make(role: str = "employee", username: str | None = None) -> User:
        counter["n"] += 1
        username = username or f"{role}{counter['n']}"
        user = User(
            username=username,
            email=f"{username}@tienda.pe",
            password=hash_password(PASSWORD),
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers(make_user):
    """Cabeceras `Authorization` para un usuario nuevo con el rol indicado."""

    def _headers(role: str = "employee") -> dict:
        user = make_user(role)
        token = create_access_token({"sub": str(user.id), "role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers
