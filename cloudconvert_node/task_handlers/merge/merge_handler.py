# cloudconvert_node/task_handlers/merge/merge_handler.py
"""
File merge handler.
"""

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.services.job_builder import TaskGraph, build_job_tasks
from cloudconvert_node.task_handlers.base_handler import AggregateTaskHandler


class MergeHandler(AggregateTaskHandler):
    """Merges every input item, in input order, into a single PDF."""

    task_type = "merge"

    def build_tasks(self, context: ExecutionContext, input_count: int) -> TaskGraph:
        return build_job_tasks(
            self.task_type,
            {"output_format": context.get_node_parameter("outputFormat", 0, "pdf")},
            input_count=input_count,
            additional_options=self.get_additional_options(context, 0),
        )

    @classmethod
    def get_description(cls) -> str:
        return "Merge multiple files into one PDF"
