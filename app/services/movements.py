"""
Aplicación de movimientos de stock e informes sobre el historial.

Un movimiento y la actualización del stock del producto se confirman en la
misma transacción; la fila del producto se bloquea (`SELECT ... FOR UPDATE`)
para serializar escrituras concurrentes sobre el mismo producto.
"""

import logging
from datetime import date, datetime, time, timezone
from typing import Dict, Iterable, List, Optional, Tuple
from sqlmodel import Session, select
from sqlalchemy.exc import SQLAlchemyError
from app.errors import InvalidArgument, NotFound, StoreUnavailable
from app.models.movement import Movement
from app.models.product import Product

logger = logging.getLogger(__name__)

MOVEMENT_TYPES = ("entry", "exit")


def compute_new_stock(stock: int, movement_type: str, quantity: int) -> int:
    """Stock resultante de un movimiento. Una salida nunca deja el stock por debajo de 0."""
    if movement_type == "entry":
        return stock + quantity
    return max(0, stock - quantity)


def apply_movement(
    db: Session,
    product_id: int,
    movement_type: str,
    quantity: int,
    reason: str,
    reference: Optional[str] = None,
    cost: Optional[float] = None,
) -> Tuple[Movement, Product]:
    if movement_type not in MOVEMENT_TYPES:
        raise InvalidArgument(f"Tipo de movimiento no válido: {movement_type!r}")
    if quantity is None or quantity <= 0:
        raise InvalidArgument("La cantidad debe ser mayor a 0")
    if cost is not None and cost < 0:
        raise InvalidArgument("El costo no puede ser negativo")

    try:
        product = db.exec(
            select(Product).where(Product.id == product_id).with_for_update()
        ).first()
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error de conexión con la base de datos")

    if not product:
        db.rollback()  # Libera el bloqueo
        raise NotFound("Producto no encontrado")

    if movement_type == "exit" and quantity > product.stock:
        logger.warning(
            "Salida de %s unidades sobre stock %s del producto %s: se deja en 0",
            quantity,
            product.stock,
            product.id,
        )

    now = datetime.now(timezone.utc)
    movement = Movement(
        product_id=product.id,
        type=movement_type,
        quantity=quantity,
        reason=reason,
        reference=reference,
        cost=cost,
        created_at=now,
    )
    product.stock = compute_new_stock(product.stock, movement_type, quantity)
    product.updated_at = now

    try:
        db.add(movement)
        db.add(product)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("No se pudo registrar el movimiento del producto %s", product_id)
        raise StoreUnavailable("Error en la base de datos al registrar el movimiento.")

    db.refresh(movement)
    db.refresh(product)
    logger.info(
        "Movimiento %s (%s x%s) aplicado al producto %s, stock=%s",
        movement.id,
        movement.type,
        movement.quantity,
        product.id,
        product.stock,
    )
    return movement, product


def list_movements(
    db: Session,
    movement_type: Optional[str] = None,
    product_id: Optional[int] = None,
) -> List[Movement]:
    """Movimientos del más reciente al más antiguo."""
    statement = select(Movement)
    if movement_type in MOVEMENT_TYPES:
        statement = statement.where(Movement.type == movement_type)
    if product_id:
        statement = statement.where(Movement.product_id == product_id)

    try:
        return list(
            db.exec(statement.order_by(Movement.created_at.desc(), Movement.id.desc())).all()
        )
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")


def get_movement(db: Session, movement_id: int) -> Movement:
    try:
        movement = db.get(Movement, movement_id)
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")
    if not movement:
        raise NotFound("Movimiento no encontrado")
    return movement


def generate_report(db: Session, start: date, end: date) -> List[Movement]:
    """Movimientos creados entre `start` y `end`, ambos días incluidos."""
    if start > end:
        raise InvalidArgument("La fecha de inicio no puede ser posterior a la fecha de fin")

    statement = (
        select(Movement)
        .where(Movement.created_at >= datetime.combine(start, time.min, tzinfo=timezone.utc))
        .where(Movement.created_at <= datetime.combine(end, time.max, tzinfo=timezone.utc))
        .order_by(Movement.created_at)
    )
    try:
        return list(db.exec(statement).all())
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")


def summarize_movements(movements: Iterable[Movement]) -> dict:
    summary = {"total_entries": 0, "total_exits": 0, "total_cost": 0.0, "count": 0}
    for movement in movements:
        if movement.type == "entry":
            summary["total_entries"] += movement.quantity
        elif movement.type == "exit":
            summary["total_exits"] += movement.quantity
        summary["total_cost"] += movement.cost or 0
        summary["count"] += 1
    summary["total_cost"] = round(summary["total_cost"], 2)
    return summary


def product_names(db: Session, movements: Iterable[Movement]) -> Dict[int, str]:
    """Nombre de cada producto referenciado. Los productos eliminados no aparecen."""
    ids = {movement.product_id for movement in movements}
    if not ids:
        return {}
    try:
        rows = db.exec(select(Product.id, Product.name).where(Product.id.in_(ids))).all()
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")
    return {product_id: name for product_id, name in rows}
