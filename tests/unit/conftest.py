import logging
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture
from typer.testing import CliRunner

from adb_client.api.auth import AuthConfigProvider
from adb_client.cli import app


def invoke_cli_runner(*args, **kwargs):
    """
    Helper method to invoke the CliRunner while asserting that the exit code is actually 0.
    """
    expected_error = kwargs.pop("expected_error") if "expected_error" in kwargs else None
    res = CliRunner().invoke(app, *args, **kwargs)

    if res.exit_code != 0:
        if not expected_error:
            logging.error("Exception in the cli runner: %s" % res.exception)
            raise res.exception
        else:
            logging.info("Expected exception in the cli runner: %s" % res.exception)

    return res


@pytest.fixture(name="_cleanup_auth_cache")
def cleanup_auth_cache():
    method = AuthConfigProvider.get_config
    method.cache_clear()
    yield
    method.cache_clear()


@pytest.fixture()
def api_client() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def mocked_client_provider(mocker: MockerFixture, api_client: MagicMock) -> MagicMock:
    return mocker.patch(
        "adb_client.commands.libraries.DatabricksClientProvider.get_v2_client", MagicMock(return_value=api_client)
    )
