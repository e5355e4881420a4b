from abc import ABC

from databricks_cli.sdk import ApiClient


class ApiClientMixin(ABC):
    def __init__(self, api_client: ApiClient):
        self.api_client = api_client
