# cloudconvert_node/services/upload_service.py
"""
Upload of input files to the one-time targets of ``import/upload`` tasks.
"""

from typing import Optional, Tuple

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.core.exceptions import InvalidParameterError, NodeOperationError
from cloudconvert_node.core.setup_logging import setup_default_logging
from cloudconvert_node.models.models import Job, Task
from cloudconvert_node.services.cloudconvert_client import CloudConvertClient
from cloudconvert_node.services.job_builder import IMPORT_UPLOAD

logger = setup_default_logging()

# (file name, content, MIME type) as accepted by httpx multipart encoding
UploadFile = Tuple[str, bytes, str]


def get_job_upload_task(job: Job, index: int = 0) -> Optional[Task]:
    """
    Return the Nth ``import/upload`` task of a job, in job-array order.

    Returns:
        Optional[Task]: The task, or None when the job has fewer upload tasks
    """
    upload_tasks = [task for task in job.tasks if task.operation == IMPORT_UPLOAD]
    if 0 <= index < len(upload_tasks):
        return upload_tasks[index]
    return None


def prepare_upload_file(context: ExecutionContext, item_index: int) -> UploadFile:
    """
    Resolve the file payload of an item.

    With ``inputBinaryData`` set (default) the named binary attachment of the
    item is used; otherwise ``inputFileContent`` is sent as text under
    ``inputFilename``.

    Raises:
        InvalidParameterError: Missing attachment or attachment without file name
    """
    if context.get_node_parameter("inputBinaryData", item_index, True):
        property_name = context.get_node_parameter("inputBinaryPropertyName", item_index, "data")
        binary = context.assert_binary_data(item_index, property_name)
        if not binary.file_name:
            raise InvalidParameterError("No file name given for input file.")
        return binary.file_name, binary.to_bytes(), binary.mime_type or "application/octet-stream"

    content = context.get_node_parameter("inputFileContent", item_index)
    filename = context.get_node_parameter("inputFilename", item_index)
    return filename, str(content).encode("utf-8"), "text/plain"


async def upload_input_file(
    client: CloudConvertClient,
    context: ExecutionContext,
    upload_task: Task,
    item_index: int = 0,
    upload_file: Optional[UploadFile] = None,
) -> None:
    """
    Post an item's file to the upload target of a task.

    The form fields of the target are sent first, verbatim and in order, the
    file part last. One attempt only.

    Args:
        client: Job API client
        context: Execution context holding the item
        upload_task: ``import/upload`` task of the created job
        item_index: Index of the item whose file is uploaded
        upload_file: Payload resolved beforehand, resolved from the item otherwise

    Raises:
        NodeOperationError: The task carries no upload target
        httpx.HTTPError: The upload request failed
    """
    form = upload_task.result.form if upload_task.result else None
    if form is None:
        raise NodeOperationError(f"Task '{upload_task.name}' has no upload target.")

    if upload_file is None:
        upload_file = prepare_upload_file(context, item_index)

    fields = {name: str(value) for name, value in form.parameters.items()}

    logger.info(f"Uploading '{upload_file[0]}' for item {item_index} to task {upload_task.name}")
    async with client.http_client(authenticated=False) as http:
        response = await http.post(form.url, data=fields, files={"file": upload_file})
    response.raise_for_status()
