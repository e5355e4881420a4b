from typing import Optional

from databricks_cli.sdk import ApiClient

from adb_client.api.auth import AuthConfigProvider


class DatabricksClientProvider:
    """
    Provides the v2 client for the Databricks REST API.
    """

    @classmethod
    def get_v2_client(cls, profile: Optional[str] = None) -> ApiClient:
        config = AuthConfigProvider.get_config(profile)
        verify = not config.insecure
        _client = ApiClient(
            host=config.host,
            token=config.token,
            verify=verify,
            default_headers=config.headers,
            command_name="adb-",
        )
        return _client
