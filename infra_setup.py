# infra_setup.py
import json
import logging

from botocore.exceptions import ClientError

from aws_config import (
    AWS_REGION, dynamodb_resource, s3_client,
    MENU_ITEMS_TABLE, VENDORS_TABLE, ORDERS_TABLE, ORDER_ITEMS_TABLE,
    MENU_IMAGES_BUCKET,
)

logger = logging.getLogger("infra_setup")

# Initialize AWS clients/resources
ddb = dynamodb_resource()
s3 = s3_client()


# --- DynamoDB Tables ---
def create_table(table_name, partition_key="id"):
    """Create a DynamoDB table if it doesn't exist."""
    table = ddb.Table(table_name)
    try:
        table.load()
        logger.info("Table '%s' already exists.", table_name)
        return table
    except ClientError as e:
        if e.response["Error"]["Code"] != "ResourceNotFoundException":
            raise

    table = ddb.create_table(
        TableName=table_name,
        AttributeDefinitions=[{"AttributeName": partition_key, "AttributeType": "S"}],
        KeySchema=[{"AttributeName": partition_key, "KeyType": "HASH"}],
        BillingMode="PAY_PER_REQUEST"
    )
    table.wait_until_exists()
    logger.info("Created table '%s' successfully.", table_name)
    return table


# --- S3 Bucket ---
def create_bucket(bucket_name, region=AWS_REGION):
    """Create the menu image bucket and let anyone read its objects."""
    existing_buckets = [b['Name'] for b in s3.list_buckets().get('Buckets', [])]
    if bucket_name in existing_buckets:
        logger.info("S3 bucket '%s' already exists.", bucket_name)
        return bucket_name

    if region == "us-east-1":
        s3.create_bucket(Bucket=bucket_name)
    else:
        s3.create_bucket(
            Bucket=bucket_name,
            CreateBucketConfiguration={'LocationConstraint': region}
        )

    # Item images are served straight from their public URL
    s3.put_public_access_block(
        Bucket=bucket_name,
        PublicAccessBlockConfiguration={
            "BlockPublicAcls": True,
            "IgnorePublicAcls": True,
            "BlockPublicPolicy": False,
            "RestrictPublicBuckets": False,
        },
    )
    s3.put_bucket_policy(Bucket=bucket_name, Policy=json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Sid": "PublicReadMenuImages",
            "Effect": "Allow",
            "Principal": "*",
            "Action": "s3:GetObject",
            "Resource": f"arn:aws:s3:::{bucket_name}/*",
        }],
    }))
    logger.info("Created S3 bucket '%s' in region '%s'.", bucket_name, region)
    return bucket_name


# --- Main setup ---
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    for name in (MENU_ITEMS_TABLE, VENDORS_TABLE, ORDERS_TABLE, ORDER_ITEMS_TABLE):
        create_table(name)
    create_bucket(MENU_IMAGES_BUCKET)

    logger.info("Infrastructure setup completed successfully.")
