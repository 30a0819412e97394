import logging
from datetime import date, datetime, timedelta

import pytest

from analytics.operations import build_operations_snapshot, calculate_spending, daily_revenue, top_selling_items
from config.config import ForecastConfig, ValuationConfig
from models.enums import DemandTrend, OrderStatus, TrendDirection, UserRole, WasteReason
from models.inventory import InventoryItem
from models.procurement import Actor, PurchaseOrder, PurchaseOrderItem
from models.sales import SalesRecord, WasteRecord

NOW = datetime(2025, 3, 31, 9, 0)
TODAY = NOW.date()


def make_sale(item_id, item_name, quantity, revenue, on: date, location_id="loc1"):
    return SalesRecord(
        id=f"{location_id}-{item_id}-{on.isoformat()}",
        date=on,
        location_id=location_id,
        item_id=item_id,
        item_name=item_name,
        quantity_sold=quantity,
        revenue=revenue,
    )


def make_order(created_at: datetime, location_id="loc1", status=OrderStatus.DRAFT) -> PurchaseOrder:
    actor = Actor(id="u1", name="Sam", role=UserRole.STAFF)
    lines = [PurchaseOrderItem.build("i1", "Tomatoes", quantity=10, unit_price=2.0)]
    order = PurchaseOrder.create("vendor1", location_id, lines, created_by=actor, now=created_at)
    return order.model_copy(update={"status": status})


@pytest.fixture
def inventory() -> list[InventoryItem]:
    common = dict(unit="kg", reorder_quantity=20)
    return [
        InventoryItem(
            id="i1",
            name="Tomatoes",
            category="Produce",
            current_stock=10,
            reorder_point=15,
            cost_per_unit=2.0,
            location_id="loc1",
            expiration_date=TODAY + timedelta(days=3),
            **common,
        ),
        InventoryItem(
            id="i2",
            name="Flour",
            category="Dry Goods",
            current_stock=50,
            reorder_point=10,
            cost_per_unit=1.0,
            location_id="loc1",
            **common,
        ),
        InventoryItem(
            id="i9",
            name="Basil",
            category="Produce",
            current_stock=1,
            reorder_point=5,
            cost_per_unit=9.0,
            location_id="loc2",
            expiration_date=TODAY,
            **common,
        ),
    ]


@pytest.fixture
def sales() -> list[SalesRecord]:
    records = [
        make_sale("i1", "Tomatoes", qty, qty * 2, TODAY - timedelta(days=4 - i))
        for i, qty in enumerate([10, 12, 14, 16, 18])
    ]
    records.append(make_sale("i2", "Flour", 5, 10, date(2025, 3, 20)))
    records.append(make_sale("i2", "Flour", 20, 100, date(2025, 2, 15)))  # previous window
    records.append(make_sale("i9", "Basil", 3, 999, date(2025, 3, 30), location_id="loc2"))
    return records


@pytest.fixture
def waste() -> list[WasteRecord]:
    return [
        WasteRecord(
            id="w1",
            date=date(2025, 3, 29),
            location_id="loc1",
            item_id="i1",
            item_name="Tomatoes",
            quantity_wasted=2,
            reason=WasteReason.SPOILAGE,
            cost_impact=5.0,
        ),
        WasteRecord(
            id="w2",
            date=date(2025, 3, 29),
            location_id="loc2",
            item_id="i9",
            item_name="Basil",
            quantity_wasted=1,
            reason=WasteReason.DAMAGE,
            cost_impact=50.0,
        ),
    ]


@pytest.fixture
def orders() -> list[PurchaseOrder]:
    return [
        make_order(NOW - timedelta(days=5)),
        make_order(NOW - timedelta(days=2), status=OrderStatus.REJECTED),
        make_order(NOW - timedelta(days=40), status=OrderStatus.APPROVED),
        make_order(NOW - timedelta(days=1), location_id="loc2"),
    ]


def test_snapshot_figures(inventory, sales, waste, orders):
    snapshot = build_operations_snapshot("loc1", inventory, sales, waste, orders, now=NOW)

    assert snapshot.location_id == "loc1"
    assert snapshot.generated_at == NOW
    assert snapshot.inventory_value == pytest.approx(70.0)
    assert snapshot.category_distribution == {"Produce": 20.0, "Dry Goods": 50.0}
    assert snapshot.low_stock_count == 1

    assert snapshot.revenue == pytest.approx(150.0)
    assert snapshot.previous_revenue == pytest.approx(100.0)
    assert snapshot.revenue_trend.direction is TrendDirection.UP
    assert snapshot.revenue_trend.percentage == pytest.approx(50.0)

    assert snapshot.monthly_spending == pytest.approx(21.6)
    assert [(e.item.id, e.days_until_expiry) for e in snapshot.expiring_items] == [("i1", 3)]
    assert [(t.item_name, t.revenue) for t in snapshot.top_selling_items] == [("Tomatoes", 140), ("Flour", 10)]

    assert len(snapshot.waste_patterns) == 1
    assert snapshot.waste_patterns[0].reason is WasteReason.SPOILAGE
    assert snapshot.waste_patterns[0].percentage_of_total_cost == pytest.approx(100.0)

    assert len(snapshot.forecasts) == 1
    forecast = snapshot.forecasts[0]
    assert forecast.item_id == "i1"
    assert forecast.predicted_quantity == 32
    assert forecast.trend is DemandTrend.INCREASING


def test_snapshot_for_empty_location(inventory, sales, waste, orders):
    snapshot = build_operations_snapshot("loc3", inventory, sales, waste, orders, now=NOW)
    assert snapshot.inventory_value == 0
    assert snapshot.revenue == 0
    assert snapshot.revenue_trend.direction is TrendDirection.NEUTRAL
    assert snapshot.monthly_spending == 0
    assert snapshot.expiring_items == []
    assert snapshot.top_selling_items == []
    assert snapshot.waste_patterns == []
    assert snapshot.forecasts == []


def test_snapshot_window_is_configurable(inventory, sales, waste, orders):
    # A 7 day window keeps the five tomato sales; the Flour sale on the 20th falls in the previous window
    snapshot = build_operations_snapshot(
        "loc1", inventory, sales, waste, orders, now=NOW, valuation_config=ValuationConfig(window_days=7)
    )
    assert snapshot.revenue == pytest.approx(140.0)
    assert snapshot.previous_revenue == pytest.approx(10.0)
    assert snapshot.revenue_trend.direction is TrendDirection.UP
    assert snapshot.revenue_trend.percentage == pytest.approx(1300.0)
    assert snapshot.monthly_spending == pytest.approx(21.6)


def test_snapshot_window_argument_overrides_config(inventory, sales, waste, orders):
    snapshot = build_operations_snapshot(
        "loc1",
        inventory,
        sales,
        waste,
        orders,
        now=NOW,
        window_days=7,
        valuation_config=ValuationConfig(window_days=90),
    )
    assert snapshot.revenue == pytest.approx(140.0)
    assert snapshot.previous_revenue == pytest.approx(10.0)


def test_snapshot_daily_revenue(inventory, sales, waste, orders):
    snapshot = build_operations_snapshot("loc1", inventory, sales, waste, orders, now=NOW)
    assert snapshot.daily_revenue == [
        (date(2025, 3, 25), 0.0),
        (date(2025, 3, 26), 0.0),
        (date(2025, 3, 27), 20.0),
        (date(2025, 3, 28), 24.0),
        (date(2025, 3, 29), 28.0),
        (date(2025, 3, 30), 32.0),
        (date(2025, 3, 31), 36.0),
    ]


def test_snapshot_forecast_horizon_and_limit(inventory, sales, waste, orders):
    # 10, 12, .. 18 fitted as 10 + 2x; a one-day horizon predicts x = 5
    short = build_operations_snapshot(
        "loc1", inventory, sales, waste, orders, now=NOW, forecast_config=ForecastConfig(horizon_days=1)
    )
    assert short.forecasts[0].predicted_quantity == 20
    assert build_operations_snapshot("loc1", inventory, sales, waste, orders, now=NOW, forecast_days=1) == short

    capped = build_operations_snapshot(
        "loc1", inventory, sales, waste, orders, now=NOW, valuation_config=ValuationConfig(forecast_limit=0)
    )
    assert capped.forecasts == []


def test_snapshot_logs_summary(inventory, sales, waste, orders, caplog):
    with caplog.at_level(logging.INFO, logger="analytics.operations"):
        build_operations_snapshot("loc1", inventory, sales, waste, orders, now=NOW)
    assert "Built operations snapshot for loc1" in caplog.text


def test_calculate_spending_excludes_rejected_and_cancelled():
    orders = [
        make_order(NOW - timedelta(days=1)),
        make_order(NOW - timedelta(days=1), status=OrderStatus.CANCELLED),
        make_order(NOW - timedelta(days=1), status=OrderStatus.DELIVERED),
    ]
    assert calculate_spending(orders, since=NOW - timedelta(days=30)) == pytest.approx(43.2)
    assert calculate_spending([], since=NOW) == 0


def test_top_selling_items_limit(sales):
    loc1 = [s for s in sales if s.location_id == "loc1"]
    top = top_selling_items(loc1, limit=1)
    assert len(top) == 1
    assert top[0].item_name == "Tomatoes"
    assert top[0].quantity == 70
    assert top_selling_items([]) == []


def test_daily_revenue_sums_same_day_sales():
    sales = [
        make_sale("i1", "Tomatoes", 1, 5.0, TODAY),
        make_sale("i2", "Flour", 1, 2.5, TODAY),
        make_sale("i1", "Tomatoes", 1, 99.0, TODAY - timedelta(days=3)),
        make_sale("i1", "Tomatoes", 1, 99.0, TODAY + timedelta(days=1)),
    ]
    assert daily_revenue(sales, TODAY, days=2) == [(TODAY - timedelta(days=1), 0.0), (TODAY, 7.5)]
