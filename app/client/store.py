"""
Réplica en memoria del inventario para clientes de la API.

`InventoryStore` es la única fuente de verdad del lado cliente: su estado solo
cambia a través de sus métodos, que llaman a la API y después vuelven a
cargar la colección afectada o aplican un parche local bien definido.
Si una llamada falla se registra el error, el estado queda intacto y la
excepción de httpx se propaga.
"""

import logging
from typing import List, Optional
import httpx
from app.schemas.alert import AlertResponse
from app.schemas.movement import MovementResponse
from app.schemas.product import ProductResponse
from app.schemas.stock_request import StockRequestResponse
from app.schemas.supplier import SupplierResponse
from app.schemas.user import UserSummary
from app.services.movements import compute_new_stock
from app.services.products import search_products, stock_status

logger = logging.getLogger(__name__)


class InventoryStore:
    def __init__(self, client: httpx.Client):
        self.client = client
        self.user: Optional[UserSummary] = None
        self.products: List[ProductResponse] = []
        self.suppliers: List[SupplierResponse] = []
        self.movements: List[MovementResponse] = []
        self.alerts: List[AlertResponse] = []
        self.requests: List[StockRequestResponse] = []

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            logger.error("%s %s falló: %s", method, url, e)
            raise
        return response

    ### SESIÓN ###
    def login(self, username: str, password: str) -> UserSummary:
        data = self._request(
            "POST", "/auth/login", json={"username": username, "password": password}
        ).json()
        self.client.headers["Authorization"] = f"Bearer {data['token']}"
        self.user = UserSummary.model_validate(data["user"])
        return self.user

    ### CARGA ###
    def fetch_products(self) -> None:
        data = self._request("GET", "/products").json()
        self.products = [ProductResponse.model_validate(item) for item in data]

    def fetch_suppliers(self) -> None:
        data = self._request("GET", "/suppliers").json()
        self.suppliers = [SupplierResponse.model_validate(item) for item in data]

    def fetch_movements(self) -> None:
        data = self._request("GET", "/movements").json()
        self.movements = [MovementResponse.model_validate(item) for item in data]

    def fetch_alerts(self) -> None:
        data = self._request("GET", "/alerts").json()
        self.alerts = [AlertResponse.model_validate(item) for item in data]

    def fetch_requests(self) -> None:
        data = self._request("GET", "/requests").json()
        self.requests = [StockRequestResponse.model_validate(item) for item in data]

    def load_all(self) -> None:
        self.fetch_products()
        self.fetch_suppliers()
        self.fetch_movements()
        self.fetch_alerts()
        self.fetch_requests()

    ### PRODUCTOS ###
    def add_product(self, fields: dict) -> ProductResponse:
        product = ProductResponse.model_validate(
            self._request("POST", "/products", json=fields).json()
        )
        self.fetch_products()
        return product

    def update_product(self, product_id: int, changes: dict) -> ProductResponse:
        product = ProductResponse.model_validate(
            self._request("PUT", f"/products/{product_id}", json=changes).json()
        )
        self.fetch_products()
        return product

    def delete_product(self, product_id: int) -> None:
        self._request("DELETE", f"/products/{product_id}")
        self.fetch_products()

    def search_products(self, query: str) -> List[ProductResponse]:
        return search_products(self.products, query)

    ### MOVIMIENTOS ###
    def apply_movement(
        self,
        product_id: int,
        movement_type: str,
        quantity: int,
        reason: str,
        reference: Optional[str] = None,
        cost: Optional[float] = None,
    ) -> MovementResponse:
        """
        Registra el movimiento y parchea el stock local con la misma regla que
        el servidor. El siguiente `fetch_products` reconcilia con la base de datos.
        """
        payload = {
            "product_id": product_id,
            "type": movement_type,
            "quantity": quantity,
            "reason": reason,
            "reference": reference,
            "cost": cost,
        }
        movement = MovementResponse.model_validate(
            self._request("POST", "/movements", json=payload).json()
        )

        self.movements.insert(0, movement)
        for index, product in enumerate(self.products):
            if product.id == product_id:
                patched = product.model_copy(
                    update={"stock": compute_new_stock(product.stock, movement_type, quantity)}
                )
                self.products[index] = patched.model_copy(
                    update={"status": stock_status(patched)}
                )
                break

        self.fetch_alerts()
        return movement

    ### ALERTAS ###
    def mark_alert_as_read(self, alert_id: int) -> AlertResponse:
        alert = AlertResponse.model_validate(
            self._request("PUT", f"/alerts/{alert_id}/read").json()
        )
        self.alerts = [alert if a.id == alert_id else a for a in self.alerts]
        return alert

    ### SOLICITUDES ###
    def create_request(self, product_id: int, quantity: int, reason: str) -> StockRequestResponse:
        request = StockRequestResponse.model_validate(
            self._request(
                "POST",
                "/requests",
                json={"product_id": product_id, "quantity": quantity, "reason": reason},
            ).json()
        )
        self.fetch_requests()
        return request
