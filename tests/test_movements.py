"""Aplicación de movimientos e informes."""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from app.errors import InvalidArgument, NotFound, StoreUnavailable
from app.models.movement import Movement
from app.services.alerts import refresh_alerts
from app.services.movements import (
    apply_movement,
    compute_new_stock,
    generate_report,
    summarize_movements,
)


class TestComputeNewStock:
    def test_entry_adds(self):
        assert compute_new_stock(5, "entry", 3) == 8

    def test_exit_subtracts(self):
        assert compute_new_stock(5, "exit", 3) == 2

    def test_exit_clamps_to_zero(self):
        assert compute_new_stock(5, "exit", 9) == 0


class TestApplyMovement:
    def test_entry_increases_stock(self, session, make_product):
        product = make_product(stock=20)
        movement, updated = apply_movement(session, product.id, "entry", 15, "Compra")
        assert updated.stock == 35
        assert movement.type == "entry"
        assert movement.quantity == 15

    def test_exit_decreases_stock(self, session, make_product):
        product = make_product(stock=20)
        _, updated = apply_movement(session, product.id, "exit", 8, "Venta")
        assert updated.stock == 12

    def test_exit_larger_than_stock_leaves_zero(self, session, make_product):
        product = make_product(stock=3)
        _, updated = apply_movement(session, product.id, "exit", 10, "Merma")
        assert updated.stock == 0

    def test_creates_exactly_one_movement(self, session, make_product):
        product = make_product()
        movement, _ = apply_movement(
            session, product.id, "entry", 4, "Compra", reference="FAC-001", cost=18.0
        )
        stored = session.exec(select(Movement)).all()
        assert len(stored) == 1
        assert stored[0].id == movement.id
        assert stored[0].product_id == product.id
        assert stored[0].reference == "FAC-001"
        assert stored[0].cost == 18.0

    def test_refreshes_updated_at(self, session, make_product):
        product = make_product()
        before = product.updated_at
        _, updated = apply_movement(session, product.id, "entry", 1, "Compra")
        assert updated.updated_at >= before

    def test_timestamps_are_utc(self):
        movement = Movement(product_id=1, type="entry", quantity=1, reason="Compra")
        assert movement.created_at.tzinfo == timezone.utc

    def test_records_readable_after_alert_refresh(self, session, make_product):
        product = make_product(stock=12, min_stock=10)
        movement, updated = apply_movement(session, product.id, "exit", 5, "Venta")

        # El commit de las alertas expira ambos registros; se recargan al leerlos
        assert [a.type for a in refresh_alerts(session)] == ["low_stock"]
        assert movement.quantity == 5
        assert updated.stock == 7
        assert movement.model_dump()["reason"] == "Venta"
        assert updated.model_dump()["sku"] == product.sku

    def test_unknown_product(self, session):
        with pytest.raises(NotFound):
            apply_movement(session, 999, "entry", 1, "Compra")
        assert session.exec(select(Movement)).all() == []

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity(self, session, make_product, quantity):
        product = make_product()
        with pytest.raises(InvalidArgument):
            apply_movement(session, product.id, "entry", quantity, "Compra")

    def test_unknown_type(self, session, make_product):
        product = make_product()
        with pytest.raises(InvalidArgument):
            apply_movement(session, product.id, "transfer", 1, "Traslado")

    def test_store_failure_rolls_back_both_writes(self, session, make_product, monkeypatch):
        product = make_product(stock=10)

        def failing_commit():
            raise SQLAlchemyError("conexión perdida")

        monkeypatch.setattr(session, "commit", failing_commit)
        with pytest.raises(StoreUnavailable):
            apply_movement(session, product.id, "exit", 4, "Venta")

        assert session.exec(select(Movement)).all() == []
        session.refresh(product)
        assert product.stock == 10


class TestGenerateReport:
    def _movement(self, session, when: datetime) -> Movement:
        movement = Movement(
            product_id=1, type="entry", quantity=1, reason="Compra", created_at=when
        )
        session.add(movement)
        session.commit()
        session.refresh(movement)
        return movement

    def test_inclusive_range(self, session):
        first_day = self._movement(session, datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc))
        last_day = self._movement(session, datetime(2024, 1, 31, 23, 59, 59, tzinfo=timezone.utc))
        self._movement(session, datetime(2023, 12, 31, 23, 59, 59, tzinfo=timezone.utc))
        self._movement(session, datetime(2024, 2, 1, 0, 0, tzinfo=timezone.utc))

        report = generate_report(session, date(2024, 1, 1), date(2024, 1, 31))
        assert {m.id for m in report} == {first_day.id, last_day.id}

    def test_start_after_end(self, session):
        with pytest.raises(InvalidArgument):
            generate_report(session, date(2024, 2, 1), date(2024, 1, 1))


class TestSummarizeMovements:
    def test_totals(self):
        movements = [
            Movement(product_id=1, type="entry", quantity=10, reason="x", cost=20.0),
            Movement(product_id=1, type="exit", quantity=4, reason="x"),
            Movement(product_id=2, type="entry", quantity=1, reason="x", cost=2.5),
        ]
        summary = summarize_movements(movements)
        assert summary == {
            "total_entries": 11,
            "total_exits": 4,
            "total_cost": 22.5,
            "count": 3,
        }
