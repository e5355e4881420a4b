from typing import Dict, List, Optional

from pydantic import model_validator

from adb_client.models.flexible import FlexibleModel
from adb_client.models.libraries import AnyLibrary
from adb_client.models.validators import at_least_one_of


class AutoScale(FlexibleModel):
    min_workers: int
    max_workers: int

    @model_validator(mode="after")
    def _validate(self):
        if self.max_workers <= self.min_workers:
            raise ValueError(
                f"max_workers ({self.max_workers}) should be bigger than min_workers ({self.min_workers})"
            )
        return self


class NewCluster(FlexibleModel):
    spark_version: str
    node_type_id: Optional[str] = None
    driver_node_type_id: Optional[str] = None
    num_workers: Optional[int] = None
    autoscale: Optional[AutoScale] = None
    spark_conf: Optional[Dict[str, str]] = None
    custom_tags: Optional[Dict[str, str]] = None
    instance_pool_id: Optional[str] = None
    policy_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _validate(cls, values):
        if isinstance(values, dict):
            at_least_one_of(["num_workers", "autoscale"], values)
        return values


class ClusterSpec(FlexibleModel):
    existing_cluster_id: Optional[str] = None
    new_cluster: Optional[NewCluster] = None
    libraries: List[AnyLibrary] = []
