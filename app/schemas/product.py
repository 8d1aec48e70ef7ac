from datetime import datetime
from pydantic import BaseModel, Field, model_validator
from typing import Optional


class ProductBase(BaseModel):
    """
    Esquema base para productos.
    - Define los campos comunes a todos los esquemas.
    - `sku`: solo letras, números, guiones y guiones bajos.
    - `max_stock` debe ser mayor que `min_stock`.
    """

    name: str = Field(..., min_length=1, max_length=150)
    sku: str = Field(
        ..., min_length=1, max_length=50, pattern="^[A-Za-z0-9_-]+$"
    )  # Field(...) significa que el campo debe ser proporcionado al crear un objeto
    category: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    price: float = Field(..., gt=0, description="Precio unitario (mayor a 0)")
    stock: int = Field(0, ge=0, description="Unidades disponibles")
    min_stock: int = Field(..., ge=0, description="Umbral de stock bajo")
    max_stock: int = Field(..., ge=1, description="Capacidad máxima (mayor al mínimo)")
    supplier_id: int = Field(..., gt=0, description="Proveedor asociado")
    unit: str = Field(..., min_length=1, max_length=30)
    location: str = Field(..., min_length=1, max_length=100)

    @model_validator(mode="after")
    def check_stock_range(self):
        if self.max_stock <= self.min_stock:
            raise ValueError("El stock máximo debe ser mayor al mínimo")
        return self


class ProductCreate(ProductBase):
    """
    Esquema para la creación de un producto.
    - `id` y las fechas se generan en la base de datos.
    """

    pass


class ProductUpdate(BaseModel):
    """
    Esquema para la actualización parcial de un producto.
    - Solo se aplican los campos enviados; la coherencia mínimo/máximo se
      valida sobre el registro resultante.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    sku: Optional[str] = Field(None, min_length=1, max_length=50, pattern="^[A-Za-z0-9_-]+$")
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    price: Optional[float] = Field(None, gt=0)
    stock: Optional[int] = Field(None, ge=0)
    min_stock: Optional[int] = Field(None, ge=0)
    max_stock: Optional[int] = Field(None, ge=1)
    supplier_id: Optional[int] = Field(None, gt=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=30)
    location: Optional[str] = Field(None, min_length=1, max_length=100)


class ProductResponse(ProductBase):
    """
    Esquema para respuestas de la API.
    - Incluye `id` y fechas, generados en la base de datos.
    - `status`: out_of_stock, low, high o normal según el stock actual.
    """

    id: int
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
