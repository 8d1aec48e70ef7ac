from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional


class MovementBase(BaseModel):
    """Esquema base con los campos comunes de un movimiento."""

    product_id: int = Field(..., gt=0, description="Producto afectado")
    type: Literal["entry", "exit"] = Field(
        ..., description="Debe ser 'entry' o 'exit'"
    )
    quantity: int = Field(
        ..., ge=1, description="Cantidad de unidades (debe ser mayor a 0)"
    )
    reason: str = Field(..., min_length=1, max_length=255)
    reference: Optional[str] = Field(None, max_length=100)
    cost: Optional[float] = Field(None, ge=0)


class MovementCreate(MovementBase):
    pass  # `id` y `created_at` se generan automáticamente


class MovementResponse(MovementBase):
    """Esquema para responder con los datos de un movimiento."""

    id: int
    created_at: datetime
    product_name: str = Field(
        default="Producto eliminado",
        description="Nombre del producto, o 'Producto eliminado' si ya no existe",
    )

    class Config:
        from_attributes = True  # Permite convertir modelos SQLModel en respuestas JSON automáticamente


class MovementSummary(BaseModel):
    total_entries: int
    total_exits: int
    total_cost: float
    count: int
