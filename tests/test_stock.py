"""tests/test_stock.py – remaining quantity derived from order history."""
from menu.stock import STOCK_CONSUMING_STATUSES, consumed_quantity, remaining_quantity


def line(quantity, status):
    return {"quantity": quantity, "order": {"status": status} if status else None}


class TestConsumedQuantity:
    def test_only_pending_and_completed_count(self):
        history = [line(3, "pending"), line(2, "completed"), line(5, "cancelled"), line(4, "refunded")]
        assert consumed_quantity(history) == 5

    def test_missing_order_is_ignored(self):
        assert consumed_quantity([line(3, None), line(1, "pending")]) == 1

    def test_empty_history(self):
        assert consumed_quantity([]) == 0
        assert consumed_quantity(None) == 0

    def test_allow_list_is_exactly_pending_and_completed(self):
        assert STOCK_CONSUMING_STATUSES == {"pending", "completed"}


class TestRemainingQuantity:
    def test_cap_minus_consumed(self):
        history = [line(3, "pending"), line(2, "completed"), line(5, "cancelled")]
        assert remaining_quantity(10, history) == 5

    def test_never_below_zero(self):
        assert remaining_quantity(4, [line(3, "pending"), line(3, "completed")]) == 0

    def test_no_cap_is_unbounded(self):
        history = [line(300, "pending"), line(2, "completed")]
        assert remaining_quantity(None, history) is None
        assert remaining_quantity(None, []) is None

    def test_zero_cap(self):
        assert remaining_quantity(0, []) == 0
