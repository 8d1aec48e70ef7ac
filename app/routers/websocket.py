import logging
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from typing import List
import anyio

logger = logging.getLogger(__name__)

router = APIRouter()


class ConnectionManager:
    """Esta clase guarda todas las conexiones activas en una lista.
    Cada vez que alguien se conecta al WebSocket, se añade a esta lista."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()  # .accept() es obligatorio para establecer la conexión con el cliente.
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, message: str):
        """Este método envía un mensaje de texto a todos los clientes conectados.
        Una conexión caída se descarta sin cortar el envío al resto."""
        for connection in list(self.active_connections):
            try:
                await connection.send_text(message)
            except Exception:
                logger.warning("Conexión WebSocket caída, se descarta")
                self.disconnect(connection)


# Instanciamos para poder usarla en cualquier parte del código
manager = ConnectionManager()


def notify(message: str) -> None:
    """
    Emite `message` a los clientes conectados desde una ruta síncrona.
    Las rutas síncronas corren en el threadpool de AnyIO, por eso se vuelve al
    event loop con `anyio.from_thread.run`. Un fallo de envío no anula la
    operación que ya se confirmó en la base de datos.
    """
    if not manager.active_connections:
        return
    try:
        anyio.from_thread.run(manager.broadcast, message)
    except Exception:
        logger.exception("Error al emitir WebSocket")


@router.websocket("/ws/inventory")
async def websocket_endpoint(websocket: WebSocket):
    await manager.connect(websocket)

    try:
        # Mantenemos la conexión activa y viva con un bucle infinito.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        # Cuando el cliente se desconecta, lo removemos para no dejar conexiones zombis.
        manager.disconnect(websocket)
