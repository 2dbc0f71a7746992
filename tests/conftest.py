"""tests/conftest.py – Django setup plus in-memory stand-ins for DynamoDB and S3."""
import copy
import os

import django
import pytest
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cloudmenu.settings")
django.setup()

from django.test.utils import setup_test_environment  # noqa: E402

setup_test_environment()

from aws_config import MENU_ITEMS_TABLE, VENDORS_TABLE, ORDERS_TABLE, ORDER_ITEMS_TABLE  # noqa: E402
from aws_lib.exceptions import ConditionFailed  # noqa: E402
from menu.models import UserSession  # noqa: E402


def remote_error(operation="Scan"):
    return ClientError({"Error": {"Code": "InternalServerError", "Message": "boom"}}, operation)


class FakeDynamoDB:
    """Same surface as aws_lib.dynamodb_client.DynamoDBClient, backed by dicts."""

    def __init__(self):
        self.tables = {}
        self.failing = set()   # operation names that raise a ClientError
        # writes go through boto3's serializer so out-of-range numbers fail the same way
        self._serializer = TypeSerializer()

    def _table(self, table):
        return self.tables.setdefault(table, {})

    def _check(self, op):
        if op in self.failing:
            raise remote_error(op)

    @staticmethod
    def _matches(record, filters):
        for name, value in (filters or {}).items():
            if isinstance(value, (list, tuple, set, frozenset)):
                if record.get(name) not in value:
                    return False
            elif record.get(name) != value:
                return False
        return True

    def add(self, table, record):
        self._table(table)[record["id"]] = copy.deepcopy(record)

    def select(self, table, filters=None, order_by=None, descending=False):
        self._check("select")
        records = [copy.deepcopy(r) for r in self._table(table).values() if self._matches(r, filters)]
        if order_by:
            records.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by)), reverse=descending)
        return records

    def first(self, table, filters):
        records = self.select(table, filters)
        return records[0] if records else {}

    def get(self, table, key):
        self._check("get")
        return copy.deepcopy(self._table(table).get(key["id"], {}))

    def batch_get(self, table, keys):
        self._check("batch_get")
        rows = self._table(table)
        return [copy.deepcopy(rows[k["id"]]) for k in keys if k["id"] in rows]

    def insert(self, table, item, key_name="id"):
        self._check("insert")
        self._serializer.serialize(item)
        if item[key_name] in self._table(table):
            raise ConditionFailed(table, {key_name: item[key_name]})
        self._table(table)[item[key_name]] = copy.deepcopy(item)
        return copy.deepcopy(item)

    def _expect(self, table, key, expected):
        current = self._table(table).get(key["id"])
        if current is None:
            raise ConditionFailed(table, key)
        for name, value in (expected or {}).items():
            if current.get(name) != value:
                raise ConditionFailed(table, key)
        return current

    def update(self, table, key, fields, expected=None):
        self._check("update")
        self._serializer.serialize(fields)
        current = self._expect(table, key, expected)
        current.update(copy.deepcopy(fields))
        return copy.deepcopy(current)

    def delete(self, table, key, expected=None):
        self._check("delete")
        if expected:
            self._expect(table, key, expected)
        self._table(table).pop(key["id"], None)


class FakeS3:
    def __init__(self):
        self.objects = {}
        self.failing = False

    def upload_fileobj(self, bucket, key, fileobj, content_type=None):
        if self.failing:
            raise remote_error("PutObject")
        self.objects[(bucket, key)] = fileobj.read()
        return key

    def public_url(self, bucket, key):
        return f"https://{bucket}.example.test/{key}"


class RecordingNotifier:
    def __init__(self):
        self.successes = []
        self.errors = []

    def success(self, text):
        self.successes.append(text)

    def error(self, text):
        self.errors.append(text)


@pytest.fixture
def ddb():
    fake = FakeDynamoDB()
    fake.add(VENDORS_TABLE, {"id": "v1", "user_id": "7", "name": "Seoul Kitchen"})
    fake.add(VENDORS_TABLE, {"id": "v2", "user_id": "8", "name": "Busan Grill"})
    return fake


@pytest.fixture
def s3():
    return FakeS3()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def session():
    return UserSession(user_id="7")


def make_record(**kw):
    defaults = dict(
        id="i1", vendor_id="v1", name="Bibimbap", name_ko="비빔밥", description=None,
        description_ko=None, price=12.5, category="Rice", is_available=True,
        quantity=None, image=None, version=1,
    )
    defaults.update(kw)
    return defaults


@pytest.fixture
def menu_records():
    return [
        make_record(id="i1", name="Kimchi Jjigae", category="Soup", image="https://cdn/old.png"),
        make_record(id="i2", name="Bibimbap", category="Rice"),
        make_record(id="i3", name="Mandu", category="Appetizer", price=6),
        make_record(id="i4", vendor_id="v2", name="Galbi", category="Grill"),
    ]


@pytest.fixture
def seeded(ddb, menu_records):
    for record in menu_records:
        ddb.add(MENU_ITEMS_TABLE, record)
    return ddb


def add_order(ddb, order_id, status, menu_item_id, quantity, order_item_id=None):
    ddb.add(ORDERS_TABLE, {"id": order_id, "status": status})
    ddb.add(ORDER_ITEMS_TABLE, {
        "id": order_item_id or f"oi-{order_id}",
        "order_id": order_id,
        "menu_item_id": menu_item_id,
        "quantity": quantity,
    })
