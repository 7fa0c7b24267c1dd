# cloudconvert_node/task_handlers/capture_website/capture_website_handler.py
"""
Website capture handler.
Renders a web page as PDF, PNG or JPG; the source is a URL, nothing is uploaded.
"""

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.services.job_builder import TaskGraph, build_job_tasks
from cloudconvert_node.task_handlers.base_handler import PerItemTaskHandler


class CaptureWebsiteHandler(PerItemTaskHandler):
    task_type = "capture-website"

    def build_tasks(self, context: ExecutionContext, item_index: int) -> TaskGraph:
        options = {
            "url": context.get_node_parameter("url", item_index, None),
            "output_format": context.get_node_parameter("outputFormat", item_index, None),
        }
        return build_job_tasks(
            self.task_type,
            options,
            additional_options=self.get_additional_options(context, item_index),
        )

    @classmethod
    def get_description(cls) -> str:
        return "Capture a website as PDF or image"
