"""
Alertas de stock bajo y agotado.

`derive_alerts` es una función pura sobre los productos y las alertas
existentes; `refresh_alerts` la aplica sobre la base de datos y guarda el
resultado.
"""

import logging
from typing import Iterable, List, Optional, Tuple
from sqlmodel import Session, select
from sqlalchemy.exc import SQLAlchemyError
from app.errors import NotFound, StoreUnavailable
from app.models.alert import Alert
from app.models.product import Product

logger = logging.getLogger(__name__)


def classify_stock(product) -> Optional[Tuple[str, str]]:
    """(tipo, severidad) de la alerta que merece el producto, o None."""
    if product.stock > product.min_stock:
        return None
    if product.stock == 0:
        return "out_of_stock", "high"
    return "low_stock", "medium"


def _alert_message(product, alert_type: str) -> str:
    if alert_type == "out_of_stock":
        return f"{product.name} ({product.sku}) está agotado"
    return (
        f"{product.name} ({product.sku}) tiene stock bajo: "
        f"{product.stock} {product.unit} (mínimo {product.min_stock})"
    )


def derive_alerts(products: Iterable, existing_alerts: Iterable) -> List[Alert]:
    """
    Calcula las alertas nuevas para los productos con stock <= mínimo.
    No se repite una alerta si ya hay otra sin leer del mismo producto y tipo.
    """
    unread = {(a.product_id, a.type) for a in existing_alerts if not a.is_read}
    new_alerts = []

    for product in products:
        classification = classify_stock(product)
        if classification is None:
            continue
        alert_type, severity = classification
        key = (product.id, alert_type)
        if key in unread:
            continue
        unread.add(key)
        new_alerts.append(
            Alert(
                type=alert_type,
                product_id=product.id,
                message=_alert_message(product, alert_type),
                severity=severity,
            )
        )

    return new_alerts


def refresh_alerts(db: Session) -> List[Alert]:
    """Recalcula y guarda las alertas a partir del estado actual de los productos."""
    try:
        products = db.exec(select(Product).order_by(Product.id)).all()
        existing = db.exec(select(Alert).where(Alert.is_read == False)).all()
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")

    new_alerts = derive_alerts(products, existing)
    if not new_alerts:
        return []

    try:
        db.add_all(new_alerts)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno al guardar las alertas.")

    for alert in new_alerts:
        db.refresh(alert)
    logger.info("%s alertas nuevas generadas", len(new_alerts))
    return new_alerts


def list_alerts(db: Session, unread_only: bool = False) -> List[Alert]:
    statement = select(Alert)
    if unread_only:
        statement = statement.where(Alert.is_read == False)
    try:
        return list(db.exec(statement.order_by(Alert.created_at.desc(), Alert.id.desc())).all())
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")


def mark_alert_as_read(db: Session, alert_id: int) -> Alert:
    try:
        alert = db.get(Alert, alert_id)
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")
    if not alert:
        raise NotFound("Alerta no encontrada")

    if alert.is_read:
        return alert

    alert.is_read = True
    try:
        db.add(alert)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno al actualizar la alerta.")
    db.refresh(alert)
    return alert
