"""Réplica del inventario en el cliente, contra la API real vía TestClient."""

import httpx
import pytest

from app.client.store import InventoryStore


@pytest.fixture
def store(client):
    return InventoryStore(client)


def login(store, make_user, role):
    user = make_user(role)
    store.login(user.username, "secreto123")
    return user


class TestInventoryStore:
    def test_login_sets_user_and_token(self, store, make_user):
        user = login(store, make_user, "manager")
        assert store.user.id == user.id
        assert store.user.role == "manager"
        assert store.client.headers["Authorization"].startswith("Bearer ")

    def test_load_all(self, store, make_user, make_product):
        make_product(name="Leche Gloria 1L")
        login(store, make_user, "employee")

        store.load_all()

        assert [p.name for p in store.products] == ["Leche Gloria 1L"]
        assert len(store.suppliers) == 1
        assert store.movements == []
        assert store.alerts == []
        assert store.requests == []

    def test_add_product_refetches(self, store, make_user, supplier):
        login(store, make_user, "admin")
        created = store.add_product(
            {
                "name": "Arroz Costeño 5kg",
                "sku": "AC5",
                "category": "Abarrotes",
                "price": 22.9,
                "stock": 0,
                "min_stock": 5,
                "max_stock": 60,
                "supplier_id": supplier.id,
                "unit": "bolsa",
                "location": "A-03",
            }
        )
        assert [p.id for p in store.products] == [created.id]
        assert store.products[0].status == "out_of_stock"

    def test_apply_movement_patches_local_state(self, store, make_user, make_product):
        product = make_product(stock=12, min_stock=10, max_stock=100)
        login(store, make_user, "manager")
        store.load_all()

        movement = store.apply_movement(product.id, "exit", 20, "Venta mayorista")

        assert store.movements[0].id == movement.id
        assert store.products[0].stock == 0
        assert store.products[0].status == "out_of_stock"
        assert [a.type for a in store.alerts] == ["out_of_stock"]

        # La siguiente carga coincide con el parche local
        store.fetch_products()
        assert store.products[0].stock == 0

    def test_failed_call_leaves_state_unchanged(self, store, make_user, make_product):
        product = make_product(stock=12)
        login(store, make_user, "employee")
        store.load_all()
        before = list(store.products)

        with pytest.raises(httpx.HTTPStatusError):
            store.apply_movement(product.id, "entry", 5, "Compra")

        assert store.products == before
        assert store.movements == []

    def test_mark_alert_as_read(self, store, make_user, make_product):
        product = make_product(stock=15, min_stock=10)
        login(store, make_user, "admin")
        store.load_all()
        store.apply_movement(product.id, "exit", 10, "Venta")

        alert = store.alerts[0]
        store.mark_alert_as_read(alert.id)
        assert store.alerts[0].is_read is True

    def test_delete_and_search(self, store, make_user, make_product):
        make_product(name="Leche Gloria 1L")
        doomed = make_product(name="Yogurt Gloria Fresa")
        login(store, make_user, "admin")
        store.fetch_products()

        assert len(store.search_products("gloria")) == 2
        store.delete_product(doomed.id)
        assert [p.name for p in store.search_products("gloria")] == ["Leche Gloria 1L"]
        assert store.search_products("") == store.products

    def test_create_request(self, store, make_user, make_product):
        product = make_product()
        login(store, make_user, "employee")

        request = store.create_request(product.id, 30, "Campaña")

        assert request.status == "pending"
        assert [r.id for r in store.requests] == [request.id]
