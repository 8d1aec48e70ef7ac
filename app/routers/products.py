from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session
from app.dependencies import require_admin, require_manager
from app.models.database import get_db
from app.models.product import Product
from app.models.user import User
from app.routers.alerts import refresh_alerts_and_notify
from app.routers.auth import get_current_user
from app.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from app.services.products import (
    create_product,
    delete_product,
    get_product,
    list_products,
    search_products,
    stock_status,
    update_product,
)
from app.utils.export import export_products_csv

router = APIRouter(prefix="/products", tags=["Productos"])


def to_response(product: Product) -> dict:
    return {**product.model_dump(), "status": stock_status(product)}


@router.get("", response_model=List[ProductResponse])
def get_products(
    search: Optional[str] = Query(None, description="Filtra por nombre, SKU o categoría"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Lista todos los productos en orden de alta, filtrados por `search` si se envía."""
    products = search_products(list_products(db), search)
    return [to_response(product) for product in products]


@router.get("/export")
def export_products(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Descarga el catálogo completo en CSV."""
    return Response(
        content=export_products_csv(list_products(db)),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="productos.csv"'},
    )


@router.get("/{id}", response_model=ProductResponse)
def get_one_product(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_response(get_product(db, id))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def post_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    """Crea un nuevo producto (admin o manager)."""
    response = to_response(create_product(db, product_data.model_dump()))
    refresh_alerts_and_notify(db)
    return response


@router.put("/{id}", response_model=ProductResponse)
def put_product(
    id: int,
    product_update: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    """Actualiza solo los campos enviados (admin o manager)."""
    response = to_response(
        update_product(db, id, product_update.model_dump(exclude_unset=True))
    )
    refresh_alerts_and_notify(db)  # Expira el producto, la respuesta ya está armada
    return response


@router.delete("/{id}")
def remove_product(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Permite a un admin eliminar un producto. Su historial de movimientos se conserva."""
    delete_product(db, id)
    return {"message": "Producto eliminado"}
