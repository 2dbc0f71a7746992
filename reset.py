"""
Wipe the menu tables and seed a demo vendor with a few items and orders.

    SEED_VENDOR_USER_ID=1 python reset.py

The user id must match the pk of a Django user so that user can manage the
seeded menu after logging in.
"""
import logging
import os
import uuid
from decimal import Decimal

from aws_config import (
    dynamodb_resource,
    MENU_ITEMS_TABLE, VENDORS_TABLE, ORDERS_TABLE, ORDER_ITEMS_TABLE,
)

logger = logging.getLogger("reset")

ddb = dynamodb_resource()

DEMO_ITEMS = [
    # name, name_ko, category, price, quantity cap
    ("Bibimbap", "비빔밥", "Rice", Decimal("12.50"), 20),
    ("Kimchi Jjigae", "김치찌개", "Soup", Decimal("11.00"), None),
    ("Tteokbokki", "떡볶이", "Street Food", Decimal("8.00"), 10),
]


def clear_table(table_name):
    """Delete every item, using the table's own key schema."""
    table = ddb.Table(table_name)
    key_names = [k['AttributeName'] for k in table.key_schema]

    scan_kwargs = {}
    count = 0
    with table.batch_writer() as batch:
        while True:
            response = table.scan(**scan_kwargs)
            for item in response.get("Items", []):
                batch.delete_item(Key={k: item[k] for k in key_names})
                count += 1
            if "LastEvaluatedKey" not in response:
                break
            scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
    logger.info("Cleared %d items from %s", count, table_name)


def seed(user_id):
    vendor_id = str(uuid.uuid4())
    ddb.Table(VENDORS_TABLE).put_item(Item={
        "id": vendor_id, "user_id": str(user_id), "name": "Demo Kitchen",
    })

    items_table = ddb.Table(MENU_ITEMS_TABLE)
    item_ids = []
    for name, name_ko, category, price, cap in DEMO_ITEMS:
        item_id = str(uuid.uuid4())
        item_ids.append(item_id)
        items_table.put_item(Item={
            "id": item_id, "vendor_id": vendor_id, "name": name, "name_ko": name_ko,
            "category": category, "price": price, "is_available": True,
            "quantity": cap, "image": None, "version": 1,
        })

    # One order per status, all for the first item
    orders_table = ddb.Table(ORDERS_TABLE)
    order_items_table = ddb.Table(ORDER_ITEMS_TABLE)
    for status, qty in (("pending", 3), ("completed", 2), ("cancelled", 5)):
        order_id = str(uuid.uuid4())
        orders_table.put_item(Item={"id": order_id, "status": status})
        order_items_table.put_item(Item={
            "id": str(uuid.uuid4()), "order_id": order_id,
            "menu_item_id": item_ids[0], "quantity": qty,
        })
    logger.info("Seeded vendor %s for user %s with %d items", vendor_id, user_id, len(item_ids))
    return vendor_id


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    for table_name in (ORDER_ITEMS_TABLE, ORDERS_TABLE, MENU_ITEMS_TABLE, VENDORS_TABLE):
        clear_table(table_name)
    seed(os.getenv("SEED_VENDOR_USER_ID", "1"))
