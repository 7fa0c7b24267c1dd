# cloudconvert_node/task_handlers/watermark/watermark_handler.py
"""
Watermark handler.
Stamps a text and/or an image imported by URL onto each input item.
"""

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.services.job_builder import PROCESS_OPTIONS, TaskGraph, build_job_tasks
from cloudconvert_node.task_handlers.base_handler import PerItemTaskHandler


class WatermarkHandler(PerItemTaskHandler):
    """
    Adds a watermark with the ``watermark`` operation.

    Styling options left unset are not sent, the remote defaults apply.
    """

    task_type = "watermark"

    def build_tasks(self, context: ExecutionContext, item_index: int) -> TaskGraph:
        options = {
            option: context.get_node_parameter(option, item_index, None)
            for option in PROCESS_OPTIONS[self.task_type]
        }

        image_url = None
        if context.get_node_parameter("useWatermarkImage", item_index, False):
            image_url = context.get_node_parameter("imageUrl", item_index)

        return build_job_tasks(
            self.task_type,
            options,
            additional_options=self.get_additional_options(context, item_index),
            watermark_image_url=image_url,
        )

    @classmethod
    def get_description(cls) -> str:
        return "Add a watermark to a file"
