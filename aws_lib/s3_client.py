from aws_config import S3_ENDPOINT_URL
from .base_client import AWSBaseClient


class S3Client(AWSBaseClient):
    def __init__(self, endpoint_url=S3_ENDPOINT_URL):
        super().__init__("s3", endpoint_url=endpoint_url)

    def upload_fileobj(self, bucket, key, fileobj, content_type=None):
        """Store an uploaded file under ``key`` and return the key."""
        params = {"Bucket": bucket, "Key": key, "Body": fileobj}
        if content_type:
            params["ContentType"] = content_type
        self.client.put_object(**params)
        return key

    def public_url(self, bucket, key):
        """Public reference to an object in a publicly readable bucket."""
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{bucket}/{key}"
        return f"https://{bucket}.s3.{self.region_name}.amazonaws.com/{key}"
