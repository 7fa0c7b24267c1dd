# cloudconvert_node/task_handlers/metadata/metadata_handler.py
"""
Metadata extraction handler.
"""

from typing import List

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.models.models import Job, OutputItem, PairedItem
from cloudconvert_node.services.job_builder import TaskGraph, build_job_tasks
from cloudconvert_node.services.result_service import get_job_metadata
from cloudconvert_node.task_handlers.base_handler import PerItemTaskHandler


class MetadataHandler(PerItemTaskHandler):
    """
    Reads the metadata of each input item.

    Nothing is exported or downloaded: the metadata object becomes the JSON
    payload of the output item.
    """

    task_type = "metadata"

    def build_tasks(self, context: ExecutionContext, item_index: int) -> TaskGraph:
        return build_job_tasks(self.task_type)

    async def collect_outputs(
        self, context: ExecutionContext, job: Job, item_index: int
    ) -> List[OutputItem]:
        return [OutputItem(json=get_job_metadata(job), paired_item=PairedItem(item=item_index))]

    @classmethod
    def get_description(cls) -> str:
        return "Extract metadata from a file"
