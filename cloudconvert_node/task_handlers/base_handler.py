# cloudconvert_node/task_handlers/base_handler.py
"""
Base task handlers defining the interface for all CloudConvert operations.

Two topologies exist: one job per input item (``PerItemTaskHandler``) and a
single job covering every input item (``AggregateTaskHandler``).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.core.exceptions import NodeOperationError
from cloudconvert_node.core.setup_logging import LogContext, setup_default_logging
from cloudconvert_node.models.models import Job, OutputItem, PairedItem
from cloudconvert_node.services.cloudconvert_client import CloudConvertClient
from cloudconvert_node.services.job_builder import (
    IMPORT_UPLOAD,
    TaskGraph,
    parse_additional_options,
)
from cloudconvert_node.services.result_service import download_output_file, get_job_export_urls
from cloudconvert_node.services.upload_service import (
    UploadFile,
    get_job_upload_task,
    prepare_upload_file,
    upload_input_file,
)


class BaseTaskHandler(ABC):
    """
    Abstract base class for all operation handlers.

    Runs the job lifecycle shared by every operation:
    build graph, submit, upload, wait, then extract results.
    """

    # Must be defined by subclasses
    task_type: str = "base"

    def __init__(self, client: CloudConvertClient):
        self.client = client
        self.logger = setup_default_logging()
        # Item being processed, reported when a failure aborts the execution
        self.current_item_index: Optional[int] = None

    @abstractmethod
    async def execute_task(self, context: ExecutionContext, output_items: List[OutputItem]) -> None:
        """
        Execute the operation over every input item.

        Outputs are appended to ``output_items`` as soon as a unit of work
        completes, so they survive a failure of a later unit.
        """
        pass

    def get_additional_options(
        self, context: ExecutionContext, item_index: int
    ) -> Optional[Dict[str, Any]]:
        return parse_additional_options(
            context.get_node_parameter("additionalOptions", item_index, None)
        )

    async def run_job(
        self,
        context: ExecutionContext,
        tasks: TaskGraph,
        uploads: Sequence[Tuple[int, UploadFile]] = (),
    ) -> Job:
        """
        Submit a graph, feed its upload tasks and wait for the job to end.

        Args:
            context: Execution context
            tasks: Task graph to submit
            uploads: (item index, payload) per upload task, in upload task order

        Returns:
            Job: Finished job
        """
        created_job = await self.client.create_job(tasks)

        with LogContext(self.logger, job_id=created_job.id, operation=self.task_type):
            for upload_index, (item_index, upload_file) in enumerate(uploads):
                upload_task = get_job_upload_task(created_job, upload_index)
                if upload_task:
                    await upload_input_file(
                        self.client, context, upload_task, item_index, upload_file=upload_file
                    )

            job = await self.client.wait_for_job(created_job.id)
            self.logger.info(f"Job {job.id} finished with {len(job.tasks)} tasks")
            return job

    async def download_exports(
        self, context: ExecutionContext, job: Job, paired_index: Optional[int]
    ) -> List[OutputItem]:
        """Download every exported file of a job into one output item each."""
        output_items = []
        for exported in get_job_export_urls(job):
            binary = await download_output_file(self.client, context, exported)
            output_items.append(
                OutputItem(
                    json={},
                    binary={"data": binary},
                    paired_item=PairedItem(item=paired_index) if paired_index is not None else None,
                )
            )
        return output_items

    @classmethod
    def get_description(cls) -> str:
        """
        Get human-readable description of this handler.

        Returns:
            str: Handler description
        """
        return f"Base task handler for {cls.task_type} operations"


class PerItemTaskHandler(BaseTaskHandler):
    """
    One complete job per input item, items processed strictly one after another.

    Outputs carry the index of the item they derive from.
    """

    @abstractmethod
    def build_tasks(self, context: ExecutionContext, item_index: int) -> TaskGraph:
        """Build the task graph of one item."""
        pass

    async def execute_task(self, context: ExecutionContext, output_items: List[OutputItem]) -> None:
        for item_index in range(len(context.get_input_items())):
            self.current_item_index = item_index
            with LogContext(self.logger, operation=self.task_type, item_index=item_index):
                output_items.extend(await self.process_item(context, item_index))

    async def process_item(self, context: ExecutionContext, item_index: int) -> List[OutputItem]:
        tasks = self.build_tasks(context, item_index)

        uploads = []
        if any(task.get("operation") == IMPORT_UPLOAD for task in tasks.values()):
            # Resolved before job creation so malformed input fails without a remote call
            uploads.append((item_index, prepare_upload_file(context, item_index)))

        job = await self.run_job(context, tasks, uploads)
        return await self.collect_outputs(context, job, item_index)

    async def collect_outputs(
        self, context: ExecutionContext, job: Job, item_index: int
    ) -> List[OutputItem]:
        return await self.download_exports(context, job, item_index)


class AggregateTaskHandler(BaseTaskHandler):
    """
    A single job fed by every input item, producing one combined output.

    The output has no paired item: it derives from all inputs at once.
    """

    @abstractmethod
    def build_tasks(self, context: ExecutionContext, input_count: int) -> TaskGraph:
        """Build the task graph covering ``input_count`` items."""
        pass

    async def execute_task(self, context: ExecutionContext, output_items: List[OutputItem]) -> None:
        input_count = len(context.get_input_items())
        if input_count == 0:
            return

        self.current_item_index = 0
        tasks = self.build_tasks(context, input_count)

        uploads = []
        for item_index in range(input_count):
            self.current_item_index = item_index
            uploads.append((item_index, prepare_upload_file(context, item_index)))

        # A failure from here on concerns the whole job, not one item
        self.current_item_index = None
        with LogContext(self.logger, operation=self.task_type):
            job = await self.run_job(context, tasks, uploads)

        exports = get_job_export_urls(job)
        if not exports:
            raise NodeOperationError(f"The {self.task_type} job finished without an output file.")

        # merge and archive always produce exactly one file
        binary = await download_output_file(self.client, context, exports[0])
        output_items.append(OutputItem(json={}, binary={"data": binary}))
