import logging
from typing import List
from sqlmodel import Session, select
from sqlalchemy.exc import SQLAlchemyError
from app.errors import NotFound, StoreUnavailable
from app.models.supplier import Supplier

logger = logging.getLogger(__name__)


def list_suppliers(db: Session) -> List[Supplier]:
    try:
        return list(db.exec(select(Supplier).order_by(Supplier.name)).all())
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")


def get_supplier(db: Session, supplier_id: int) -> Supplier:
    try:
        supplier = db.get(Supplier, supplier_id)
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")
    if not supplier:
        raise NotFound("Proveedor no encontrado")
    return supplier


def _save(db: Session, supplier: Supplier) -> Supplier:
    try:
        db.add(supplier)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno al guardar el proveedor.")
    db.refresh(supplier)
    return supplier


def create_supplier(db: Session, fields: dict) -> Supplier:
    supplier = _save(db, Supplier(**fields))
    logger.info("Proveedor %s creado", supplier.id)
    return supplier


def update_supplier(db: Session, supplier_id: int, changes: dict) -> Supplier:
    supplier = get_supplier(db, supplier_id)
    for key, value in changes.items():
        setattr(supplier, key, value)
    return _save(db, supplier)
