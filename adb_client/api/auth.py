import os
from functools import lru_cache, partial
from typing import Callable, Dict, List, Optional, Tuple

from databricks_cli.configure.provider import _fetch_from_fs, _get_option_if_exists
from pydantic import BaseModel, ConfigDict, field_validator

from adb_client.utils import adb_echo

PROFILE_ENV = "ADB_CLI_PROFILE"

# ~/.databrickscfg option -> environment variable carrying the same setting
CONFIG_OPTIONS = {
    "host": "DATABRICKS_HOST",
    "token": "DATABRICKS_TOKEN",
    "insecure": "DATABRICKS_INSECURE",
    "azure_service_principal_token": "AZURE_SERVICE_PRINCIPAL_TOKEN",
    "workspace_id": "WORKSPACE_ID",
    "org_id": "ORG_ID",
}

AZURE_HEADERS = {
    "azure_service_principal_token": "X-Databricks-Azure-SP-Management-Token",
    "workspace_id": "X-Databricks-Azure-Workspace-Resource-Id",
    "org_id": "X-Databricks-Org-Id",
}

RawOptions = Dict[str, Optional[str]]


class AuthConfig(BaseModel):
    """Token-based connection settings of a single workspace."""

    model_config = ConfigDict(frozen=True)

    host: str
    token: str
    insecure: bool = False
    headers: Dict[str, str] = {}
    source: str

    @field_validator("host")
    @classmethod
    def _check_scheme(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError(f"Host {value} doesn't start with https:// or http://, please check the host configuration.")
        return value

    @classmethod
    def from_options(cls, options: RawOptions, source: str) -> Optional["AuthConfig"]:
        """Returns None when the options don't carry both the host and the token."""
        if not (options.get("host") and options.get("token")):
            return None
        return cls(
            host=options["host"],
            token=options["token"],
            insecure=(options.get("insecure") or "").lower() in ("true", "1"),
            headers={header: options[key] for key, header in AZURE_HEADERS.items() if options.get(key)},
            source=source,
        )


def read_environment() -> RawOptions:
    return {option: os.environ.get(variable) for option, variable in CONFIG_OPTIONS.items()}


def read_profile(profile: str) -> RawOptions:
    raw_config = _fetch_from_fs()
    return {option: _get_option_if_exists(raw_config, profile, option) for option in CONFIG_OPTIONS}


class AuthConfigProvider:
    @classmethod
    @lru_cache(maxsize=None)
    def get_config(cls, profile: Optional[str] = None) -> AuthConfig:
        """
        Resolves the connection settings from the first source providing both host and token:
        environment variables, the given profile, the profile named in the ADB_CLI_PROFILE variable.
        """
        sources: List[Tuple[str, Callable[[], RawOptions]]] = [("environment variables", read_environment)]
        for _profile in (profile, os.environ.get(PROFILE_ENV)):
            if _profile:
                sources.append((f"profile {_profile}", partial(read_profile, _profile)))

        for source, read in sources:
            config = AuthConfig.from_options(read(), source)
            if config:
                adb_echo(f"Using auth config from {source}")
                return config

        raise Exception(
            "No valid authentication information was found in "
            f"{', '.join(source for source, _ in sources)}.\n"
            "Please provide DATABRICKS_HOST and DATABRICKS_TOKEN environment variables, "
            f"or point --profile or {PROFILE_ENV} to a ~/.databrickscfg profile with host and token."
        )
