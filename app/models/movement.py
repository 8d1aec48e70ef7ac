from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field


class Movement(SQLModel, table=True):
    """Registro inmutable de una entrada o salida de stock."""

    __tablename__ = "movements"

    id: int = Field(default=None, primary_key=True, nullable=False)
    # Sin clave foránea: borrar un producto no borra su historial
    product_id: int = Field(nullable=False, index=True)
    type: str = Field(
        nullable=False
    )  # Tipo como `str`, la restricción la ponemos en el esquema
    quantity: int = Field(nullable=False, ge=1)
    reason: str = Field(nullable=False)
    reference: Optional[str] = Field(default=None)
    cost: Optional[float] = Field(default=None, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
