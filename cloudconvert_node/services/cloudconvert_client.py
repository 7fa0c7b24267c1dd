# cloudconvert_node/services/cloudconvert_client.py
"""
CloudConvert job API client.
Handles job creation, the blocking wait until a job ends, and the operations catalog.
"""

from typing import Any, Dict, List, Mapping, Optional

import httpx

from cloudconvert_node.core.config import config
from cloudconvert_node.core.exceptions import JobFailedError, JobSubmissionError
from cloudconvert_node.core.setup_logging import setup_default_logging
from cloudconvert_node.models.models import Job

logger = setup_default_logging()

CASCADING_FAILURE_CODE = "INPUT_TASK_FAILED"

_DEFAULT = object()


def get_job_error_message(job: Job) -> str:
    """
    Build the user-facing message of a failed job.

    Tasks that failed only because an upstream task failed
    (``INPUT_TASK_FAILED``) are left out so the message names root causes.

    Returns:
        str: ``"<message> (Code: <code>)"`` entries joined with ``"; "``
    """
    return "; ".join(
        f"{task.message} (Code: {task.code or '?'})"
        for task in job.tasks
        if task.status == "error" and task.code != CASCADING_FAILURE_CODE
    )


class CloudConvertClient:
    """
    Client for the CloudConvert v2 job API.

    The auth is selected once per execution and attached to every
    authenticated call. Upload targets and exported files live behind
    pre-signed URLs and are fetched through unauthenticated clients.
    """

    def __init__(
        self,
        auth: Optional[httpx.Auth] = None,
        *,
        api_url: Optional[str] = None,
        sync_api_url: Optional[str] = None,
        job_tag: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.auth = auth
        self.api_url = (api_url or config.CLOUDCONVERT_API_URL).rstrip("/")
        self.sync_api_url = (sync_api_url or config.CLOUDCONVERT_SYNC_API_URL).rstrip("/")
        self.job_tag = job_tag or config.CLOUDCONVERT_JOB_TAG
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def http_client(self, authenticated: bool = True, timeout: Any = _DEFAULT) -> httpx.AsyncClient:
        """
        Create an HTTP client for one remote call.

        Args:
            authenticated: Attach the execution's auth
            timeout: Seconds, or None for no client-side bound
        """
        return httpx.AsyncClient(
            auth=self.auth if authenticated else None,
            timeout=self.timeout if timeout is _DEFAULT else timeout,
            transport=self.transport,
            headers={"Accept": "application/json"},
        )

    async def create_job(self, tasks: Mapping[str, Dict[str, Any]]) -> Job:
        """
        Submit a task graph and return the created job.

        Args:
            tasks: Mapping from task name to task descriptor

        Returns:
            Job: Created job, upload tasks carrying their upload target

        Raises:
            JobSubmissionError: The service rejected the job with a structured error
            httpx.HTTPError: Transport failure or unstructured error response
        """
        async with self.http_client() as client:
            response = await client.post(
                f"{self.api_url}/v2/jobs",
                json={"tag": self.job_tag, "tasks": dict(tasks)},
            )

        if response.is_error:
            _raise_submission_error(response)

        job = Job.model_validate(response.json()["data"])
        logger.info(f"Created CloudConvert job {job.id} with {len(job.tasks)} tasks")
        return job

    async def wait_for_job(self, job_id: str) -> Job:
        """
        Block until the job reaches a terminal status.

        The synchronous API holds the request open until the job ends; no
        client-side timeout or retry is applied.

        Raises:
            JobFailedError: The job ended with the error status
            httpx.HTTPError: Transport failure
        """
        logger.info(f"Waiting for CloudConvert job {job_id}")
        async with self.http_client(timeout=None) as client:
            response = await client.get(f"{self.sync_api_url}/v2/jobs/{job_id}")
        response.raise_for_status()

        job = Job.model_validate(response.json()["data"])

        if job.status == "error":
            message = get_job_error_message(job)
            logger.error(f"CloudConvert job {job_id} failed: {message}")
            raise JobFailedError(message, job)

        logger.info(f"CloudConvert job {job_id} ended with status {job.status}")
        return job

    async def get_output_formats(
        self, operation: str, input_format: Optional[str] = None
    ) -> List[str]:
        """
        List the output formats the remote service offers for an operation.

        Args:
            operation: Remote operation (convert, thumbnail, capture-website, ...)
            input_format: Restrict to operations accepting this input format

        Returns:
            List[str]: Sorted, de-duplicated output formats
        """
        params = {"filter[operation]": operation}
        if input_format:
            params["filter[input_format]"] = input_format

        async with self.http_client(authenticated=False) as client:
            response = await client.get(f"{self.api_url}/v2/operations", params=params)
        response.raise_for_status()

        formats = {
            entry["output_format"]
            for entry in response.json().get("data", [])
            if entry.get("output_format")
        }
        return sorted(formats)


def _raise_submission_error(response: httpx.Response) -> None:
    """Classify a rejected job creation; unstructured errors propagate unchanged."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("code"):
        message = body.get("message") or response.reason_phrase
        logger.error(f"CloudConvert rejected job: {message} ({body['code']})")
        raise JobSubmissionError(message, body["code"])

    response.raise_for_status()
