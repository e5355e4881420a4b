from requests import HTTPError
from rich.markup import escape

from adb_client.api.mixins import ApiClientMixin
from adb_client.models.jobs import JobResponse, JobSettings
from adb_client.utils import adb_echo


class JobsService(ApiClientMixin):
    def create(self, settings: JobSettings) -> int:
        adb_echo(f"🪄  Creating new job with name {escape(settings.name)}")
        payload = settings.model_dump(exclude_none=True)
        try:
            _response = self.api_client.perform_query("POST", "/jobs/create", data=payload)
        except HTTPError as e:
            adb_echo(":boom: Failed to create job with definition:")
            adb_echo(payload)
            raise e
        return _response["job_id"]

    def reset(self, job_id: int, settings: JobSettings):
        adb_echo(f"🪄  Updating existing job with name {escape(settings.name)} and id: {job_id}")
        payload = {"job_id": job_id, "new_settings": settings.model_dump(exclude_none=True)}
        try:
            self.api_client.perform_query("POST", "/jobs/reset", data=payload)
        except HTTPError as e:
            adb_echo(":boom: Failed to update job with definition:")
            adb_echo(payload)
            raise e

    def get(self, job_id: int) -> JobResponse:
        raw = self.api_client.perform_query("GET", "/jobs/get", data={"job_id": job_id})
        return JobResponse.model_validate(raw)
