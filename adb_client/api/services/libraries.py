from typing import Any, Dict, List, Optional

from requests import HTTPError

from adb_client.api.mixins import ApiClientMixin
from adb_client.models.libraries import ClusterLibraryStatuses, Library, LibraryCodec, LibraryFullStatus
from adb_client.utils import adb_echo


class LibrariesService(ApiClientMixin):
    """
    Thin wrapper around the Libraries API 2.0.
    https://docs.databricks.com/dev-tools/api/latest/libraries.html
    """

    def all_cluster_statuses(self) -> List[ClusterLibraryStatuses]:
        raw = self.api_client.perform_query("GET", "/libraries/all-cluster-statuses")
        return [ClusterLibraryStatuses.model_validate(s) for s in raw.get("statuses", [])]

    def cluster_status(self, cluster_id: str) -> List[LibraryFullStatus]:
        raw = self.api_client.perform_query("GET", "/libraries/cluster-status", data={"cluster_id": cluster_id})
        return [LibraryFullStatus.model_validate(s) for s in raw.get("library_statuses", [])]

    def find_status(self, cluster_id: str, library: Library) -> Optional[LibraryFullStatus]:
        """Searches the cluster statuses for the given library, comparing by value"""
        return self.match_status(self.cluster_status(cluster_id), library)

    @staticmethod
    def match_status(statuses: List[LibraryFullStatus], library: Library) -> Optional[LibraryFullStatus]:
        return next((s for s in statuses if s.library == library), None)

    def install(self, cluster_id: str, libraries: List[Library]):
        adb_echo(f"📦 Installing {len(libraries)} libraries on cluster {cluster_id}")
        self._post("/libraries/install", self._payload(cluster_id, libraries))

    def uninstall(self, cluster_id: str, libraries: List[Library]):
        adb_echo(f"🧹 Uninstalling {len(libraries)} libraries from cluster {cluster_id}")
        self._post("/libraries/uninstall", self._payload(cluster_id, libraries))

    @staticmethod
    def _payload(cluster_id: str, libraries: List[Library]) -> Dict[str, Any]:
        return {"cluster_id": cluster_id, "libraries": LibraryCodec.encode_all(libraries)}

    def _post(self, path: str, payload: Dict[str, Any]):
        try:
            self.api_client.perform_query("POST", path, data=payload)
        except HTTPError as e:
            adb_echo(f":boom: Request to {path} failed with payload:")
            adb_echo(payload)
            raise e
