"""Alta, edición, baja y búsqueda de productos."""

import pytest
from sqlmodel import select

from app.errors import Conflict, InvalidArgument, NotFound
from app.models.movement import Movement
from app.models.product import Product
from app.services.movements import apply_movement
from app.services.products import (
    create_product,
    delete_product,
    get_product,
    search_products,
    stock_status,
    update_product,
)
from app.utils.export import export_products_csv


@pytest.fixture
def fields(supplier):
    return {
        "name": "Leche Gloria 1L",
        "sku": "LG-1L",
        "category": "Lácteos",
        "description": "Leche evaporada",
        "price": 4.2,
        "stock": 30,
        "min_stock": 10,
        "max_stock": 120,
        "supplier_id": supplier.id,
        "unit": "lata",
        "location": "B-02",
    }


class TestCreateProduct:
    def test_assigns_id_and_timestamps(self, session, fields):
        product = create_product(session, fields)
        assert product.id is not None
        assert product.created_at is not None
        assert product.updated_at is not None
        assert product.sku == "LG-1L"

    def test_duplicate_sku(self, session, fields):
        create_product(session, fields)
        with pytest.raises(Conflict):
            create_product(session, {**fields, "name": "Otra leche"})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "   "},
            {"sku": ""},
            {"category": " "},
            {"unit": ""},
            {"location": ""},
            {"price": 0},
            {"stock": -1},
            {"min_stock": -1},
            {"max_stock": 10},
            {"supplier_id": None},
        ],
    )
    def test_rejects_invalid_fields(self, session, fields, overrides):
        with pytest.raises(InvalidArgument):
            create_product(session, {**fields, **overrides})

    def test_unknown_supplier(self, session, fields):
        with pytest.raises(InvalidArgument):
            create_product(session, {**fields, "supplier_id": 999})


class TestUpdateProduct:
    def test_merges_fields(self, session, fields):
        product = create_product(session, fields)
        before = product.updated_at
        updated = update_product(session, product.id, {"price": 4.5, "location": "C-01"})
        assert updated.price == 4.5
        assert updated.location == "C-01"
        assert updated.name == "Leche Gloria 1L"
        assert updated.updated_at >= before

    def test_sku_change_to_unused(self, session, fields):
        product = create_product(session, fields)
        assert update_product(session, product.id, {"sku": "LG-1L-NEW"}).sku == "LG-1L-NEW"

    def test_sku_change_to_used(self, session, fields):
        create_product(session, {**fields, "sku": "OCUPADO"})
        product = create_product(session, fields)
        with pytest.raises(Conflict):
            update_product(session, product.id, {"sku": "OCUPADO"})

    def test_same_sku_is_allowed(self, session, fields):
        product = create_product(session, fields)
        assert update_product(session, product.id, {"sku": "LG-1L"}).sku == "LG-1L"

    def test_merged_record_is_validated(self, session, fields):
        product = create_product(session, fields)
        with pytest.raises(InvalidArgument):
            update_product(session, product.id, {"max_stock": 5})

    def test_unknown_product(self, session):
        with pytest.raises(NotFound):
            update_product(session, 999, {"price": 1.0})


class TestDeleteProduct:
    def test_keeps_movements(self, session, fields):
        product = create_product(session, fields)
        apply_movement(session, product.id, "exit", 2, "Venta")

        delete_product(session, product.id)

        with pytest.raises(NotFound):
            get_product(session, product.id)
        movements = session.exec(select(Movement)).all()
        assert [m.product_id for m in movements] == [product.id]

    def test_unknown_product(self, session):
        with pytest.raises(NotFound):
            delete_product(session, 999)


class TestSearchProducts:
    @pytest.fixture
    def catalog(self):
        return [
            Product(id=1, name="Arroz Costeño 5kg", sku="AC5", category="Abarrotes"),
            Product(id=2, name="Leche Gloria 1L", sku="LG1", category="Lácteos"),
            Product(id=3, name="Yogurt Fresa", sku="YF1", category="Lácteos"),
        ]

    def test_matches_name(self, catalog):
        assert [p.id for p in search_products(catalog, "gloria")] == [2]

    def test_matches_sku_and_category(self, catalog):
        assert [p.id for p in search_products(catalog, "ac5")] == [1]
        assert [p.id for p in search_products(catalog, "LÁCTEOS")] == [2, 3]

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_empty_query_returns_everything_in_order(self, catalog, query):
        assert search_products(catalog, query) == catalog

    def test_no_match(self, catalog):
        assert search_products(catalog, "detergente") == []


class TestStockStatus:
    @pytest.mark.parametrize(
        "stock,expected",
        [(0, "out_of_stock"), (10, "low"), (50, "normal"), (100, "high")],
    )
    def test_status(self, stock, expected):
        assert stock_status(Product(stock=stock, min_stock=10, max_stock=100)) == expected


class TestExport:
    def test_csv(self, session, fields):
        create_product(session, fields)
        create_product(session, {**fields, "sku": "LG-400", "name": "Leche Gloria 400g", "stock": 0})

        lines = export_products_csv(session.exec(select(Product).order_by(Product.id))).splitlines()
        assert lines[0].split(",") == [
            "id", "name", "sku", "category", "price", "stock", "min_stock",
            "max_stock", "unit", "location", "supplier_id", "status",
        ]
        assert len(lines) == 3
        assert lines[1].startswith("1,Leche Gloria 1L,LG-1L,")
        assert lines[2].endswith(",out_of_stock")
