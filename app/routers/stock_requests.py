from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from app.dependencies import require_manager
from app.models.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.stock_request import (
    StockRequestCreate,
    StockRequestResponse,
    StockRequestStatusUpdate,
)
from app.services.stock_requests import (
    change_request_status,
    create_request,
    list_requests,
)

router = APIRouter(prefix="/requests", tags=["Solicitudes de reposición"])


@router.get("", response_model=List[StockRequestResponse])
def get_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Admin y manager ven todas las solicitudes; el resto, solo las suyas."""
    return list_requests(db, current_user)


@router.post("", response_model=StockRequestResponse, status_code=status.HTTP_201_CREATED)
def post_request(
    request_data: StockRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return create_request(db, current_user, request_data.model_dump())


@router.put("/{id}/status", response_model=StockRequestResponse)
def put_request_status(
    id: int,
    data: StockRequestStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    """Aprueba, rechaza o marca como atendida una solicitud."""
    return change_request_status(db, id, data.status)
