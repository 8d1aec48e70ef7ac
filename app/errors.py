"""
Errores de dominio del inventario.

Las operaciones de `app.services` lanzan estas excepciones; `app.main` registra un
handler que las convierte en respuestas JSON con el código HTTP de cada clase.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class InventoryError(Exception):
    """Base de todos los errores de dominio."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(InventoryError):
    """Datos de entrada inválidos: campo vacío, cantidad no positiva, rango mal formado..."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(InventoryError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(InventoryError):
    """Violación de unicidad (SKU, usuario o email repetidos)."""

    status_code = status.HTTP_409_CONFLICT


class StoreUnavailable(InventoryError):
    """Fallo de la base de datos subyacente."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
