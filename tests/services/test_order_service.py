"""Tests for the order transactional workflow.

The atomicity tests read the order from a second connection while the
replace is still in flight, so they use a file-backed SQLite database.
"""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from database.session import Database
from errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from models._common import utcnow
from models.order_item_model import OrderItem
from models.order_model import Order
from models.product_model import Product, ProductStatus
from queries.order_queries import OrderQueries
from schemas.orders import OrderCreate, OrderItemIn, OrderUpdate
from services.order_service import OrderService
from services.product_service import ProductService
from tests.helpers import item_rows, make_order, make_product


def _items(*pairs):
    return [OrderItemIn(product_id=pid, quantity=qty) for pid, qty in pairs]


@pytest.fixture
def products(session):
    return {
        "A": make_product(session, barcode="A", name="Apple"),
        "B": make_product(session, barcode="B", name="Banana"),
        "C": make_product(session, barcode="C", name="Cherry"),
    }


@pytest.fixture
def file_database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'orders.db'}")
    db.create_all()
    yield db
    db.dispose()


class TestCreateOrder:

    def test_creates_order_with_items(self, session, products):
        order = make_order(session, [(products["A"].id, 2), (products["B"].id, 3)], note="weekly")

        assert order.id
        assert order.note == "weekly"
        assert item_rows(order) == [(products["A"].id, 2), (products["B"].id, 3)]
        assert order.created_at is not None

    def test_items_keep_submission_order(self, session, database, products):
        order = make_order(session, [(products["C"].id, 1), (products["A"].id, 1), (products["B"].id, 1)])

        with database.session() as other:
            stored = OrderQueries(other).find_by_id(order.id)
            assert [it.product_id for it in stored.items] == [
                products["C"].id, products["A"].id, products["B"].id,
            ]

    def test_marks_products_as_ordered(self, session, database, products):
        make_order(session, [(products["A"].id, 1)])

        with database.session() as other:
            assert other.get(Product, products["A"].id).is_ordered is True
            assert other.get(Product, products["B"].id).is_ordered is False

    def test_unknown_product_rejected_and_nothing_persisted(self, session, database, products):
        with pytest.raises(ValidationError, match="Some products not found") as exc:
            make_order(session, [(products["A"].id, 1), ("nonexistent", 1)])

        assert exc.value.details == {"missingProductIds": ["nonexistent"]}
        with database.session() as other:
            assert other.query(Order).count() == 0
            assert other.query(OrderItem).count() == 0
            assert other.get(Product, products["A"].id).is_ordered is False

    def test_duplicate_product_ids_kept_as_separate_lines(self, session, products):
        a = products["A"].id
        order = make_order(session, [(a, 1), (a, 2), (a, 3)])
        assert item_rows(order) == [(a, 1), (a, 2), (a, 3)]

    def test_duplicate_ids_do_not_mask_a_missing_one(self, session, products):
        a = products["A"].id
        with pytest.raises(ValidationError):
            make_order(session, [(a, 1), (a, 1), ("ghost", 1)])

    def test_empty_items_rejected(self, session):
        with pytest.raises(ValidationError):
            OrderService(session).create_order(OrderCreate.model_construct(note=None, items=[]))

    def test_product_deleted_after_the_check_is_still_rejected(self, session, database, products, monkeypatch):
        # the existence check ran before a concurrent delete committed
        monkeypatch.setattr(OrderService, "_check_products_exist", lambda self, rows: None)

        with pytest.raises(ValidationError, match="Some products not found"):
            make_order(session, [(products["A"].id, 1), ("deleted-meanwhile", 1)])

        with database.session() as other:
            assert other.query(Order).count() == 0
            assert other.get(Product, products["A"].id).is_ordered is False

    def test_schema_rejects_quantity_beyond_integer_column(self):
        with pytest.raises(ValueError):
            OrderItemIn(product_id="x", quantity=2**31)

    def test_schema_rejects_non_positive_quantity(self):
        with pytest.raises(ValueError):
            OrderItemIn(product_id="x", quantity=0)


class TestUpdateOrder:

    def test_note_only_leaves_items_alone(self, session, products):
        order = make_order(session, [(products["A"].id, 2)], note="old")

        updated = OrderService(session).update_order(order.id, OrderUpdate(note="new"))

        assert updated.note == "new"
        assert item_rows(updated) == [(products["A"].id, 2)]

    def test_full_replace(self, session, database, products):
        a, b, c = products["A"].id, products["B"].id, products["C"].id
        order = make_order(session, [(a, 2), (b, 3)], note="keep")

        updated = OrderService(session).update_order(order.id, OrderUpdate(items=_items((c, 1))))

        assert item_rows(updated) == [(c, 1)]
        assert updated.note == "keep"
        with database.session() as other:
            assert other.query(OrderItem).filter(OrderItem.order_id == order.id).count() == 1
            assert other.get(Product, c).is_ordered is True

    def test_replace_and_note_together(self, session, products):
        a, b = products["A"].id, products["B"].id
        order = make_order(session, [(a, 1)])

        updated = OrderService(session).update_order(order.id, OrderUpdate(note="both", items=_items((b, 4))))

        assert updated.note == "both"
        assert item_rows(updated) == [(b, 4)]

    def test_not_found(self, session):
        with pytest.raises(NotFoundError):
            OrderService(session).update_order("missing", OrderUpdate(note="x"))

    def test_unknown_product_leaves_order_unchanged(self, session, database, products):
        a = products["A"].id
        order = make_order(session, [(a, 2)], note="before")

        with pytest.raises(ValidationError):
            OrderService(session).update_order(order.id, OrderUpdate(note="after", items=_items(("ghost", 1))))

        with database.session() as other:
            stored = OrderQueries(other).find_by_id(order.id)
            assert stored.note == "before"
            assert item_rows(stored) == [(a, 2)]

    def test_product_deleted_during_replace_is_rejected(self, session, database, products, monkeypatch):
        a = products["A"].id
        order = make_order(session, [(a, 2)], note="before")
        monkeypatch.setattr(OrderService, "_check_products_exist", lambda self, rows: None)

        with pytest.raises(ValidationError, match="Some products not found"):
            OrderService(session).update_order(order.id, OrderUpdate(note="after", items=_items(("deleted-meanwhile", 1))))

        with database.session() as other:
            stored = OrderQueries(other).find_by_id(order.id)
            assert stored.note == "before"
            assert item_rows(stored) == [(a, 2)]

    def test_fault_mid_replace_rolls_back(self, session, database, products, monkeypatch):
        a, b, c = products["A"].id, products["B"].id, products["C"].id
        order = make_order(session, [(a, 2), (b, 3)], note="before")

        def failing_replace(self, order, rows):
            order.items.clear()
            self.db.flush()  # old items are already deleted inside the transaction
            raise OperationalError("INSERT INTO order_items", {}, Exception("disk I/O error"))

        monkeypatch.setattr(OrderQueries, "replace_items", failing_replace)

        with pytest.raises(PersistenceError):
            OrderService(session).update_order(order.id, OrderUpdate(note="after", items=_items((c, 1))))

        with database.session() as other:
            stored = OrderQueries(other).find_by_id(order.id)
            assert stored.note == "before"
            assert item_rows(stored) == [(a, 2), (b, 3)]
            assert other.get(Product, c).is_ordered is False

    def test_concurrent_reader_never_sees_partial_replace(self, file_database, monkeypatch):
        writer = file_database.session()
        a = make_product(writer, barcode="A").id
        b = make_product(writer, barcode="B").id
        c = make_product(writer, barcode="C").id
        order = make_order(writer, [(a, 2), (b, 3)])

        observed = []
        real_replace = OrderQueries.replace_items

        def replace_and_peek(self, order, rows):
            result = real_replace(self, order, rows)
            # deletes and inserts are flushed but not committed yet
            with file_database.session() as reader:
                observed.append(item_rows(OrderQueries(reader).find_by_id(order.id)))
            return result

        monkeypatch.setattr(OrderQueries, "replace_items", replace_and_peek)

        updated = OrderService(writer).update_order(order.id, OrderUpdate(items=_items((c, 1))))
        writer.close()

        assert observed == [[(a, 2), (b, 3)]]
        assert item_rows(updated) == [(c, 1)]


class TestDeleteOrder:

    def test_deletes_order_and_items(self, session, database, products):
        order = make_order(session, [(products["A"].id, 1), (products["B"].id, 1)])

        OrderService(session).delete_order(order.id)

        with database.session() as other:
            assert other.get(Order, order.id) is None
            assert other.query(OrderItem).count() == 0

    def test_not_found(self, session):
        with pytest.raises(NotFoundError):
            OrderService(session).delete_order("missing")

    def test_product_deletable_once_orders_are_gone(self, session, products):
        a = products["A"].id
        order = make_order(session, [(a, 1)])
        OrderService(session).delete_order(order.id)

        ProductService(session).delete_product(a)
        assert session.get(Product, a) is None


class TestListOrders:

    def test_paginated_newest_first(self, session, products):
        a = products["A"].id
        first = make_order(session, [(a, 1)])
        second = make_order(session, [(a, 1)])
        first.created_at = utcnow() - timedelta(days=1)
        session.commit()

        orders, total = OrderService(session).list_orders(page=1, page_size=1)

        assert total == 2
        assert [o.id for o in orders] == [second.id]

    def test_date_range(self, session, products):
        a = products["A"].id
        old = make_order(session, [(a, 1)])
        old.created_at = utcnow() - timedelta(days=10)
        session.commit()
        recent = make_order(session, [(a, 1)])

        since = utcnow() - timedelta(days=1)
        orders, total = OrderService(session).list_orders(start=since)
        assert total == 1
        assert orders[0].id == recent.id

        _, total_before = OrderService(session).list_orders(end=since)
        assert total_before == 1

    def test_stats(self, session, products):
        make_order(session, [(products["A"].id, 1)])
        make_order(session, [(products["B"].id, 1)])
        assert OrderService(session).order_stats() == {"total_orders": 2}


class TestCokeScenario:

    def test_product_order_then_blocked_delete(self, session):
        coke = make_product(session, name="Coke", barcode="COKE-001")
        assert coke.is_ordered is False
        assert coke.status == ProductStatus.ACTIVE

        order = make_order(session, [(coke.id, 50)])
        assert len(order.items) == 1
        assert order.items[0].quantity == 50

        with pytest.raises(ConflictError):
            ProductService(session).delete_product(coke.id)
