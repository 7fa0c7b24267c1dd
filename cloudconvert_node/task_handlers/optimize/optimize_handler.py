# cloudconvert_node/task_handlers/optimize/optimize_handler.py
"""
File optimization handler.
"""

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.services.job_builder import TaskGraph, build_job_tasks
from cloudconvert_node.task_handlers.base_handler import PerItemTaskHandler


class OptimizeHandler(PerItemTaskHandler):
    """Optimizes and compresses each input item (PDF, PNG, JPG)."""

    task_type = "optimize"

    def build_tasks(self, context: ExecutionContext, item_index: int) -> TaskGraph:
        # Profile left to the remote default when unset (Ex: web, print, archive, max)
        return build_job_tasks(
            self.task_type,
            {"profile": context.get_node_parameter("profile", item_index, None)},
            additional_options=self.get_additional_options(context, item_index),
        )

    @classmethod
    def get_description(cls) -> str:
        return "Optimize and compress a file"
