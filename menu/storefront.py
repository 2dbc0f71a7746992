"""
Customer facing menu.

Reads every available item, expands its order items and their orders, and
derives how many of each capped item are left.
"""
import logging
from collections import defaultdict

from botocore.exceptions import BotoCoreError, ClientError

from aws_config import MENU_ITEMS_TABLE, ORDER_ITEMS_TABLE, ORDERS_TABLE
from aws_lib.exceptions import BatchIncomplete
from .models import StorefrontItem, to_decimal
from .stock import remaining_quantity

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to load menu items. Please try again later."

REMOTE_ERRORS = (ClientError, BotoCoreError, BatchIncomplete)

# DynamoDB limits an IN filter to 100 operands
IN_FILTER_LIMIT = 100


def _chunks(values, size):
    for start in range(0, len(values), size):
        yield values[start:start + size]


class Storefront:
    def __init__(self, ddb, notify, placeholder_image):
        self.ddb = ddb
        self.notify = notify
        self.placeholder_image = placeholder_image

        self.items = []
        self.loading = True
        self.error = None

    def _order_history(self, item_ids):
        """menu item id -> [{"quantity": n, "order": {...} or None}, ...]"""
        order_items = []
        for chunk in _chunks(item_ids, IN_FILTER_LIMIT):
            order_items.extend(self.ddb.select(ORDER_ITEMS_TABLE, {"menu_item_id": chunk}))

        order_ids = sorted({oi["order_id"] for oi in order_items if oi.get("order_id")})
        orders = {}
        if order_ids:
            records = self.ddb.batch_get(ORDERS_TABLE, [{"id": i} for i in order_ids])
            orders = {o["id"]: o for o in records}

        history = defaultdict(list)
        for oi in order_items:
            history[oi["menu_item_id"]].append({
                "quantity": oi.get("quantity", 0),
                "order": orders.get(oi.get("order_id")),
            })
        return history

    def _present(self, record, order_items):
        return StorefrontItem(
            id=record["id"],
            name=record.get("name", ""),
            name_ko=record.get("name_ko"),
            description=record.get("description") or "",
            description_ko=record.get("description_ko") or "",
            price=to_decimal(record.get("price")),
            image=record.get("image") or self.placeholder_image,
            category=record.get("category") or "",
            remaining_quantity=remaining_quantity(record.get("quantity"), order_items),
        )

    def fetch_items(self):
        """Query and derive, letting remote errors propagate."""
        records = self.ddb.select(
            MENU_ITEMS_TABLE, {"is_available": True}, order_by="category"
        )
        if not records:
            return []
        history = self._order_history([r["id"] for r in records])
        return [self._present(r, history.get(r["id"], [])) for r in records]

    def fetch_item(self, item_id):
        """One available item with its remaining stock, or None. Remote errors propagate."""
        record = self.ddb.get(MENU_ITEMS_TABLE, {"id": item_id})
        if not record or not record.get("is_available"):
            return None
        history = self._order_history([item_id])
        return self._present(record, history.get(item_id, []))

    def load(self):
        try:
            self.items = self.fetch_items()
        except REMOTE_ERRORS:
            logger.exception("Error fetching menu items")
            self.error = FETCH_FAILED
            self.notify.error(FETCH_FAILED)
        finally:
            self.loading = False
        return self.items
