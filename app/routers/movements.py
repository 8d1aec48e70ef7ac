from datetime import date, datetime, timezone
from dateutil.relativedelta import relativedelta
from typing import Dict, List, Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from app.dependencies import require_manager
from app.models.database import get_db
from app.models.movement import Movement
from app.models.user import User
from app.routers.alerts import refresh_alerts_and_notify
from app.routers.auth import get_current_user
from app.routers.websocket import notify
from app.schemas.movement import MovementCreate, MovementResponse, MovementSummary
from app.services.movements import (
    apply_movement,
    generate_report,
    get_movement,
    list_movements,
    product_names,
    summarize_movements,
)


router = APIRouter(prefix="/movements", tags=["Movimientos"])


def to_response(movement: Movement, names: Dict[int, str]) -> MovementResponse:
    return MovementResponse(
        **movement.model_dump(),
        product_name=names.get(movement.product_id, "Producto eliminado"),
    )


@router.get("", response_model=List[MovementResponse])
def get_movements(
    type: Optional[Literal["entry", "exit"]] = Query(None),
    product_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Lista los movimientos del más reciente al más antiguo."""
    movements = list_movements(db, movement_type=type, product_id=product_id)
    names = product_names(db, movements)
    return [to_response(movement, names) for movement in movements]


@router.get("/report", response_model=List[MovementResponse])
def get_report(
    start: Optional[date] = Query(None, description="Por defecto, un mes antes de `end`"),
    end: Optional[date] = Query(None, description="Por defecto, hoy (UTC)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Movimientos registrados entre `start` y `end` (ambos incluidos)."""
    end = end or datetime.now(timezone.utc).date()
    start = start or end - relativedelta(months=1)
    movements = generate_report(db, start, end)
    names = product_names(db, movements)
    return [to_response(movement, names) for movement in movements]


@router.get("/summary", response_model=MovementSummary)
def get_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Totales de unidades de entrada y salida, y costo acumulado."""
    return summarize_movements(list_movements(db))


@router.get("/{id}", response_model=MovementResponse)
def get_one_movement(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    movement = get_movement(db, id)
    return to_response(movement, product_names(db, [movement]))


@router.post("", response_model=MovementResponse, status_code=status.HTTP_201_CREATED)
def create_movement(
    movement_data: MovementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    """
    Registra una entrada o salida y actualiza el stock del producto en la misma transacción.

    - Solo **admin** y **manager** pueden registrar movimientos.
    - Una salida mayor que el stock disponible deja el stock en 0.
    """
    movement, product = apply_movement(
        db,
        product_id=movement_data.product_id,
        movement_type=movement_data.type,
        quantity=movement_data.quantity,
        reason=movement_data.reason,
        reference=movement_data.reference,
        cost=movement_data.cost,
    )

    # La respuesta se arma antes del recálculo: su commit expira `movement` y `product`
    response = to_response(movement, {product.id: product.name})
    notify(f"Nuevo movimiento registrado: {movement.id} ({movement.type})")
    refresh_alerts_and_notify(db)
    return response
