from typing import Optional

from pydantic import model_validator

from adb_client.models.clusters import ClusterSpec
from adb_client.models.flexible import FlexibleModel
from adb_client.models.validators import mutually_exclusive


class JobSettings(ClusterSpec):
    # this follows the structure of the 2.0 Jobs API
    # https://docs.databricks.com/dev-tools/api/2.0/jobs.html
    name: str
    max_retries: Optional[int] = None
    timeout_seconds: Optional[int] = None
    max_concurrent_runs: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def _validate(cls, values):
        if isinstance(values, dict):
            mutually_exclusive(["existing_cluster_id", "new_cluster"], values)
        return values


class JobResponse(FlexibleModel):
    job_id: int
    creator_user_name: Optional[str] = None
    settings: JobSettings
