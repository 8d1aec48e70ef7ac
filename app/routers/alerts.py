import logging
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from app.dependencies import require_manager
from app.errors import InventoryError
from app.models.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.routers.websocket import notify
from app.schemas.alert import AlertResponse
from app.services.alerts import list_alerts, mark_alert_as_read, refresh_alerts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/alerts", tags=["Alertas"])


def refresh_alerts_and_notify(db: Session) -> None:
    """Recalcula las alertas tras un cambio de stock ya confirmado.
    Si falla, las alertas se regeneran en el siguiente recálculo."""
    try:
        new_alerts = refresh_alerts(db)
    except InventoryError:
        logger.exception("No se pudieron recalcular las alertas")
        return
    for alert in new_alerts:
        notify(f"Nueva alerta ({alert.severity}): {alert.message}")


@router.get("", response_model=List[AlertResponse])
def get_alerts(
    unread: bool = Query(False, description="Solo alertas sin leer"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Lista las alertas, de la más reciente a la más antigua."""
    return list_alerts(db, unread_only=unread)


@router.post("/refresh", response_model=List[AlertResponse])
def post_refresh_alerts(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    """Recalcula las alertas a partir del stock actual y devuelve solo las nuevas."""
    new_alerts = refresh_alerts(db)
    for alert in new_alerts:
        notify(f"Nueva alerta ({alert.severity}): {alert.message}")
    return new_alerts


@router.put("/{id}/read", response_model=AlertResponse)
def read_alert(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Marca una alerta como leída. Una alerta leída nunca vuelve a quedar sin leer."""
    return mark_alert_as_read(db, id)
