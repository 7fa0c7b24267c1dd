# cloudconvert_node/task_handlers/thumbnail/thumbnail_handler.py
"""
Thumbnail creation handler.
"""

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.services.job_builder import TaskGraph, build_job_tasks
from cloudconvert_node.task_handlers.base_handler import PerItemTaskHandler


class ThumbnailHandler(PerItemTaskHandler):
    """Creates a thumbnail of each input item (PNG, JPG or WEBP)."""

    task_type = "thumbnail"

    def build_tasks(self, context: ExecutionContext, item_index: int) -> TaskGraph:
        options = {
            "output_format": context.get_node_parameter("outputFormat", item_index, None),
            "width": context.get_node_parameter("width", item_index, None),
            "height": context.get_node_parameter("height", item_index, None),
            "fit": context.get_node_parameter("fit", item_index, None),
        }
        return build_job_tasks(
            self.task_type,
            options,
            additional_options=self.get_additional_options(context, item_index),
        )

    @classmethod
    def get_description(cls) -> str:
        return "Create a thumbnail of a file"
