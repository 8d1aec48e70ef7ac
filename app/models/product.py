from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    __tablename__ = "products"

    id: int = Field(default=None, primary_key=True, nullable=False)
    name: str = Field(nullable=False)
    sku: str = Field(unique=True, index=True, nullable=False)
    category: str = Field(nullable=False, index=True)
    description: Optional[str] = Field(default=None)
    price: float = Field(nullable=False, ge=0)
    stock: int = Field(default=0, nullable=False, ge=0)  # Nunca negativo
    min_stock: int = Field(default=0, nullable=False, ge=0)
    max_stock: int = Field(nullable=False)
    # Sin clave foránea: el proveedor se valida al crear, no en cada escritura
    supplier_id: int = Field(nullable=False, index=True)
    unit: str = Field(nullable=False)
    location: str = Field(nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
