# cloudconvert_node/services/result_service.py
"""
Extraction of job results: exported file descriptors, downloads and metadata.
"""

from typing import Any, Dict, List

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.core.setup_logging import setup_default_logging
from cloudconvert_node.models.models import BinaryData, Job, TaskResultFile
from cloudconvert_node.services.cloudconvert_client import CloudConvertClient
from cloudconvert_node.services.job_builder import EXPORT_URL

logger = setup_default_logging()


def get_job_export_urls(job: Job) -> List[TaskResultFile]:
    """
    Collect the output files of every finished ``export/url`` task.

    Order is task order, then file order within a task; one export can yield
    several files (Ex: one PNG per page of a PDF). Only files carrying a
    download URL are returned.
    """
    return [
        exported
        for task in job.tasks
        if task.operation == EXPORT_URL and task.status == "finished" and task.result
        for exported in task.result.files
        if exported.url
    ]


def get_job_metadata(job: Job) -> Dict[str, Any]:
    """Return the metadata object of the finished ``metadata`` task (empty if none)."""
    for task in job.tasks:
        if task.operation == "metadata" and task.status == "finished":
            if task.result and task.result.metadata is not None:
                return dict(task.result.metadata)
            break
    return {}


async def download_output_file(
    client: CloudConvertClient, context: ExecutionContext, exported: TaskResultFile
) -> BinaryData:
    """
    Stream an exported file into a binary attachment.

    The response ``content-type`` header becomes the attachment's MIME type.

    Raises:
        httpx.HTTPError: The download failed
    """
    logger.info(f"Downloading output file '{exported.filename}'")
    async with client.http_client(authenticated=False) as http:
        async with http.stream("GET", exported.url) as response:
            response.raise_for_status()
            return await context.prepare_binary_data(
                response.aiter_bytes(),
                exported.filename,
                response.headers.get("content-type"),
            )
