# aws_config.py
import os

import boto3
from botocore.config import Config

# -----------------------------
# AWS region & boto3 config
# -----------------------------
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")

# One attempt per request, the SDK does not retry on our behalf
boto3_config = Config(
    region_name=AWS_REGION,
    retries={"max_attempts": 1, "mode": "standard"}
)

# Point these at DynamoDB Local / MinIO during development
DYNAMODB_ENDPOINT_URL = os.getenv("DYNAMODB_ENDPOINT_URL") or None
S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL") or None

# -----------------------------
# Tables & buckets
# -----------------------------
MENU_ITEMS_TABLE = os.getenv("DDB_MENU_ITEMS_TABLE", "menu_items")
VENDORS_TABLE = os.getenv("DDB_VENDORS_TABLE", "vendors")
ORDERS_TABLE = os.getenv("DDB_ORDERS_TABLE", "orders")
ORDER_ITEMS_TABLE = os.getenv("DDB_ORDER_ITEMS_TABLE", "order_items")

MENU_IMAGES_BUCKET = os.getenv("S3_MENU_IMAGES_BUCKET", "menu-items")


# -----------------------------
# AWS clients/resources
# -----------------------------
def dynamodb_resource():
    return boto3.resource(
        "dynamodb", region_name=AWS_REGION, config=boto3_config,
        endpoint_url=DYNAMODB_ENDPOINT_URL
    )


def s3_client():
    return boto3.client(
        "s3", region_name=AWS_REGION, config=boto3_config,
        endpoint_url=S3_ENDPOINT_URL
    )
