from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from app.dependencies import require_manager
from app.models.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.supplier import SupplierCreate, SupplierResponse, SupplierUpdate
from app.services.suppliers import (
    create_supplier,
    get_supplier,
    list_suppliers,
    update_supplier,
)

router = APIRouter(prefix="/suppliers", tags=["Proveedores"])


@router.get("", response_model=List[SupplierResponse])
def get_suppliers(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_suppliers(db)


@router.get("/{id}", response_model=SupplierResponse)
def get_one_supplier(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_supplier(db, id)


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
def post_supplier(
    supplier_data: SupplierCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    return create_supplier(db, supplier_data.model_dump())


@router.put("/{id}", response_model=SupplierResponse)
def put_supplier(
    id: int,
    supplier_update: SupplierUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    return update_supplier(db, id, supplier_update.model_dump(exclude_unset=True))
