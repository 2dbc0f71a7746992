import boto3

from aws_config import AWS_REGION, boto3_config


class AWSBaseClient:
    """
    Base AWS client that opens a NEW boto3 session on every access
    so temporary credentials are picked up again once they rotate.
    """

    def __init__(self, service_name, region_name=AWS_REGION, endpoint_url=None):
        self.service_name = service_name
        self.region_name = region_name
        self.endpoint_url = endpoint_url

    def _session(self):
        return boto3.Session()

    @property
    def client(self):
        return self._session().client(
            self.service_name,
            region_name=self.region_name,
            endpoint_url=self.endpoint_url,
            config=boto3_config,
        )

    @property
    def resource(self):
        return self._session().resource(
            self.service_name,
            region_name=self.region_name,
            endpoint_url=self.endpoint_url,
            config=boto3_config,
        )
