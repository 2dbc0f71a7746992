import logging
from decimal import Decimal
from functools import reduce

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from aws_config import DYNAMODB_ENDPOINT_URL
from .base_client import AWSBaseClient
from .exceptions import BatchIncomplete, ConditionFailed

logger = logging.getLogger(__name__)

# DynamoDB caps BatchGetItem at 100 keys per call
BATCH_GET_LIMIT = 100
# batch_get_item calls per chunk before unprocessed keys are an error
BATCH_GET_MAX_PASSES = 5


class DynamoDBClient(AWSBaseClient):
    def __init__(self, endpoint_url=DYNAMODB_ENDPOINT_URL):
        super().__init__("dynamodb", endpoint_url=endpoint_url)

    def _deserialize(self, value):
        """Convert DynamoDB data into plain Python types."""
        if isinstance(value, dict):
            return {k: self._deserialize(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._deserialize(v) for v in value]
        if isinstance(value, Decimal):
            return int(value) if value % 1 == 0 else float(value)
        return value

    def _convert_to_decimal(self, data):
        """Recursively convert numbers to Decimal, DynamoDB rejects floats."""
        if isinstance(data, dict):
            return {k: self._convert_to_decimal(v) for k, v in data.items()}
        if isinstance(data, list):
            return [self._convert_to_decimal(v) for v in data]
        if isinstance(data, bool):
            return data
        if isinstance(data, int):
            return Decimal(data)
        if isinstance(data, float):
            return Decimal(str(data))
        return data

    def _filter_expression(self, filters):
        """
        Build an AND of equality checks. A list/tuple/set value means
        "equal to any of these".
        """
        conditions = []
        for name, value in filters.items():
            if isinstance(value, (list, tuple, set, frozenset)):
                conditions.append(Attr(name).is_in(self._convert_to_decimal(list(value))))
            else:
                conditions.append(Attr(name).eq(self._convert_to_decimal(value)))
        return reduce(lambda a, b: a & b, conditions)

    def _expected_condition(self, key, expected):
        # Update by identifier never creates a row
        conditions = [Attr(name).exists() for name in key]
        for name, value in (expected or {}).items():
            if value is None:
                conditions.append(Attr(name).not_exists())
            else:
                conditions.append(Attr(name).eq(self._convert_to_decimal(value)))
        return reduce(lambda a, b: a & b, conditions)

# CRUD

    def select(self, table, filters=None, order_by=None, descending=False):
        """
        Scan a table for records matching every equality filter.

        Follows LastEvaluatedKey until the scan is exhausted. DynamoDB scans
        are unordered, so ``order_by`` sorts client side; records missing the
        attribute sort last.
        """
        tbl = self.resource.Table(table)
        kwargs = {}
        if filters:
            kwargs["FilterExpression"] = self._filter_expression(filters)

        items = []
        while True:
            resp = tbl.scan(**kwargs)
            items.extend(resp.get("Items", []))
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key

        records = [self._deserialize(i) for i in items]
        if order_by:
            records.sort(
                key=lambda r: (r.get(order_by) is None, r.get(order_by)),
                reverse=descending,
            )
        logger.debug("select %s filters=%s -> %d records", table, filters, len(records))
        return records

    def first(self, table, filters):
        """Return the first record matching ``filters`` or {} when none does."""
        records = self.select(table, filters)
        return records[0] if records else {}

    def get(self, table, key):
        tbl = self.resource.Table(table)
        resp = tbl.get_item(Key=key)
        item = resp.get("Item")
        return self._deserialize(item) if item else {}

    def batch_get(self, table, keys):
        """
        Fetch many records by primary key, in chunks of 100.

        Unprocessed keys are asked for again, at most BATCH_GET_MAX_PASSES
        calls per chunk; BatchIncomplete is raised if some are still left.
        """
        keys = list(keys)
        found = []
        resource = self.resource
        for start in range(0, len(keys), BATCH_GET_LIMIT):
            request = {table: {"Keys": keys[start:start + BATCH_GET_LIMIT]}}
            for _ in range(BATCH_GET_MAX_PASSES):
                resp = resource.batch_get_item(RequestItems=request)
                found.extend(resp.get("Responses", {}).get(table, []))
                request = resp.get("UnprocessedKeys") or None
                if not request:
                    break
            if request:
                remaining = request.get(table, {}).get("Keys", [])
                logger.error("batch_get on %s gave up with %d keys unprocessed", table, len(remaining))
                raise BatchIncomplete(table, remaining)
        return [self._deserialize(i) for i in found]

    def insert(self, table, item, key_name="id"):
        """Put a new item, refusing to overwrite an existing one with the same key."""
        tbl = self.resource.Table(table)
        clean_item = self._convert_to_decimal(item)
        try:
            tbl.put_item(
                Item=clean_item,
                ConditionExpression=Attr(key_name).not_exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ConditionFailed(table, {key_name: item.get(key_name)}) from e
            raise
        return self._deserialize(clean_item)

    def update(self, table, key, fields, expected=None):
        """
        Overwrite ``fields`` on an existing item and return the new image.

        ``expected`` maps attribute names to the values the stored item must
        still hold (None meaning the attribute is absent). A mismatch, or a
        missing item, raises ConditionFailed.
        """
        tbl = self.resource.Table(table)
        names, values, assignments = {}, {}, []
        for i, (name, value) in enumerate(fields.items()):
            names[f"#f{i}"] = name
            values[f":f{i}"] = value
            assignments.append(f"#f{i} = :f{i}")

        try:
            resp = tbl.update_item(
                Key=key,
                UpdateExpression="SET " + ", ".join(assignments),
                ConditionExpression=self._expected_condition(key, expected),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=self._convert_to_decimal(values),
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ConditionFailed(table, key) from e
            raise
        return self._deserialize(resp.get("Attributes", {}))

    def delete(self, table, key, expected=None):
        """
        Delete an item from the DynamoDB table.

        With ``expected`` the item must exist and match it, else ConditionFailed.
        """
        tbl = self.resource.Table(table)
        if not expected:
            return tbl.delete_item(Key=key)
        try:
            return tbl.delete_item(
                Key=key, ConditionExpression=self._expected_condition(key, expected)
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ConditionFailed(table, key) from e
            raise
