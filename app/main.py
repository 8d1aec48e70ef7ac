import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.errors import InventoryError, inventory_error_handler
from app.models.database import create_db_and_tables
from app.routers import (
    alerts,
    auth,
    movements,
    products,
    stock_requests,
    suppliers,
)
from fastapi.middleware.cors import CORSMiddleware  # CORS
from app.routers.websocket import router as websocket_router
from app.utils.getenv import get_list_env
from app.utils.logger import setup_logger

logger = setup_logger()


# Crear la base de datos y las tablas al iniciar la aplicación
@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("API de inventario iniciada")
    yield


app = FastAPI(title="Inventario API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_list_env("CORS_ORIGINS", "http://localhost:5173"),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Errores de dominio → 400 / 404 / 409 / 503
app.add_exception_handler(InventoryError, inventory_error_handler)

# Incluir routers
app.include_router(auth.router)
app.include_router(products.router)
app.include_router(suppliers.router)
app.include_router(movements.router)
app.include_router(alerts.router)
app.include_router(stock_requests.router)
# Websocket
app.include_router(websocket_router)


@app.get("/")
def read_root():
    return {"message": "API funcionando correctamente"}


def run():
    """Punto de entrada del script `inventario-api`."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
