"""
Solicitudes de reposición de stock.

Estados: pending -> approved | rejected, approved -> fulfilled.
"""

import logging
from datetime import datetime, timezone
from typing import List
from sqlmodel import Session, select
from sqlalchemy.exc import SQLAlchemyError
from app.errors import InvalidArgument, NotFound, StoreUnavailable
from app.models.stock_request import StockRequest
from app.models.user import User
from app.services.products import get_product
from app.utils.validation import is_manager_user

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    "pending": {"approved", "rejected"},
    "approved": {"fulfilled"},
}


def create_request(db: Session, requester: User, fields: dict) -> StockRequest:
    if fields.get("quantity") is None or fields["quantity"] <= 0:
        raise InvalidArgument("La cantidad debe ser mayor a 0")
    get_product(db, fields["product_id"])

    now = datetime.now(timezone.utc)
    request = StockRequest(
        **fields, requester_id=requester.id, status="pending", created_at=now, updated_at=now
    )
    try:
        db.add(request)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno al registrar la solicitud.")
    db.refresh(request)

    logger.info("Solicitud %s creada por el usuario %s", request.id, requester.id)
    return request


def list_requests(db: Session, current_user: User) -> List[StockRequest]:
    """Administradores y responsables ven todas; el resto, solo las suyas."""
    statement = select(StockRequest)
    if not is_manager_user(current_user):
        statement = statement.where(StockRequest.requester_id == current_user.id)
    try:
        return list(db.exec(statement.order_by(StockRequest.created_at.desc())).all())
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")


def change_request_status(db: Session, request_id: int, status: str) -> StockRequest:
    try:
        request = db.get(StockRequest, request_id)
    except SQLAlchemyError:
        raise StoreUnavailable("Error de conexión con la base de datos")
    if not request:
        raise NotFound("Solicitud no encontrada")

    if status not in ALLOWED_TRANSITIONS.get(request.status, set()):
        raise InvalidArgument(
            f"No se puede pasar una solicitud de '{request.status}' a '{status}'"
        )

    request.status = status
    request.updated_at = datetime.now(timezone.utc)
    try:
        db.add(request)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise StoreUnavailable("Error interno al actualizar la solicitud.")
    db.refresh(request)

    logger.info("Solicitud %s -> %s", request.id, status)
    return request
