# cloudconvert_node/task_handlers/archive/archive_handler.py
"""
Archive creation handler.
"""

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.services.job_builder import TaskGraph, build_job_tasks
from cloudconvert_node.task_handlers.base_handler import AggregateTaskHandler


class ArchiveHandler(AggregateTaskHandler):
    """Packs every input item into one archive (ZIP, RAR, 7Z, TAR, ...)."""

    task_type = "archive"

    def build_tasks(self, context: ExecutionContext, input_count: int) -> TaskGraph:
        return build_job_tasks(
            self.task_type,
            {"output_format": context.get_node_parameter("outputFormat", 0, None)},
            input_count=input_count,
            additional_options=self.get_additional_options(context, 0),
        )

    @classmethod
    def get_description(cls) -> str:
        return "Create an archive from multiple files"
