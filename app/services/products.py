"""
Ciclo de vida de productos: alta, edición, baja, búsqueda y estado de stock.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from app.errors import Conflict, InvalidArgument, NotFound, StoreUnavailable
from app.models.product import Product
from app.models.supplier import Supplier

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("name", "sku", "category", "unit", "location")


def validate_product_fields(fields: dict) -> None:
    """Valida un registro completo de producto. Lanza `InvalidArgument` al primer error."""
    for name in REQUIRED_TEXT_FIELDS:
        value = fields.get(name)
        if value is None or not str(value).strip():
            raise InvalidArgument(f"El campo '{name}' es requerido")

    price = fields.get("price")
    if price is None or price <= 0:
        raise InvalidArgument("El precio debe ser mayor a 0")

    stock = fields.get("stock")
    if stock is None or stock < 0:
        raise InvalidArgument("El stock no puede ser negativo")

    min_stock = fields.get("min_stock")
    if min_stock is None or min_stock < 0:
        raise InvalidArgument("El stock mínimo no puede ser negativo")

    max_stock = fields.get("max_stock")
    if max_stock is None or max_stock <= min_stock:
        raise InvalidArgument("El stock máximo debe ser mayor al mínimo")

    if not fields.get("supplier_id"):
        raise InvalidArgument("Debe seleccionar un proveedor")


def stock_status(product) -> str:
    if product.stock == 0:
        return "out_of_stock"
    if product.stock <= product.min_stock:
        return "low"
    if product.stock >= product.max_stock:
        return "high"
    return "normal"


def search_products(products: Iterable, query: Optional[str]) -> list:
    """Filtra por nombre, SKU o categoría sin distinguir mayúsculas.
    Una búsqueda vacía devuelve la colección completa en su orden original."""
    q = (query or "").strip().lower()
    if not q:
        return list(products)
    return [
        p
        for p in products
        if q in p.name.lower() or q in p.sku.lower() or q in p.category.lower()
    ]


def _strip_text(fields: dict) -> dict:
    return {
        key: value.strip() if key in REQUIRED_TEXT_FIELDS and isinstance(value, str) else value
        for key, value in fields.items()
    }


def _sku_taken(db: Session, sku: str, exclude_id: Optional[int] = None) -> bool:
    statement = select(Product.id).where(Product.sku == sku)
    if exclude_id is not None:
        statement = statement.where(Product.id != exclude_id)
    return db.exec(statement).first() is not None


def _ensure_supplier(db: Session, supplier_id: int) -> None:
    if not db.get(Supplier, supplier_id):
        raise InvalidArgument("El proveedor especificado no existe.")


def list_products(db: Session) -> List[Product]:
    try:
        return list(db.exec(select(Product).order_by(Product.id)).all())
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")


def get_product(db: Session, product_id: int) -> Product:
    try:
        product = db.get(Product, product_id)
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")
    if not product:
        raise NotFound("Producto no encontrado")
    return product


def create_product(db: Session, fields: dict) -> Product:
    fields = _strip_text(fields)
    validate_product_fields(fields)

    try:
        _ensure_supplier(db, fields["supplier_id"])
        if _sku_taken(db, fields["sku"]):
            raise Conflict("El SKU ya está registrado.")
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")

    now = datetime.now(timezone.utc)
    product = Product(**fields, created_at=now, updated_at=now)

    try:
        db.add(product)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("El SKU ya está registrado.")
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno al crear el producto.")
    db.refresh(product)

    logger.info("Producto %s creado (SKU %s)", product.id, product.sku)
    return product


def update_product(db: Session, product_id: int, changes: dict) -> Product:
    """Aplica solo los campos enviados y valida el registro resultante."""
    product = get_product(db, product_id)
    changes = _strip_text(changes)
    validate_product_fields({**product.model_dump(), **changes})

    try:
        # El SKU solo se revalida si cambia
        if "sku" in changes and changes["sku"] != product.sku:
            if _sku_taken(db, changes["sku"], exclude_id=product.id):
                raise Conflict("El SKU ya está en uso")
        if "supplier_id" in changes and changes["supplier_id"] != product.supplier_id:
            _ensure_supplier(db, changes["supplier_id"])
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")

    for key, value in changes.items():
        setattr(product, key, value)
    product.updated_at = datetime.now(timezone.utc)

    try:
        db.add(product)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("El SKU ya está en uso")
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno al actualizar el producto.")
    db.refresh(product)

    logger.info("Producto %s actualizado: %s", product.id, ", ".join(sorted(changes)))
    return product


def delete_product(db: Session, product_id: int) -> None:
    """Elimina el producto. Sus movimientos, alertas y solicitudes se conservan."""
    product = get_product(db, product_id)
    try:
        db.delete(product)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno al eliminar el producto.")
    logger.info("Producto %s eliminado", product_id)
