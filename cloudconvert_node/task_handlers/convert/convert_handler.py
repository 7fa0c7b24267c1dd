# cloudconvert_node/task_handlers/convert/convert_handler.py
"""
File conversion handler.
Converts each input item to the requested output format.
"""

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.services.job_builder import TaskGraph, build_job_tasks
from cloudconvert_node.task_handlers.base_handler import PerItemTaskHandler


class ConvertHandler(PerItemTaskHandler):
    """
    Converts files with the ``convert`` operation.

    A single input may produce several outputs (Ex: a multi-page PDF
    converted to PNG), each emitted as its own item.
    """

    task_type = "convert"

    def build_tasks(self, context: ExecutionContext, item_index: int) -> TaskGraph:
        return build_job_tasks(
            self.task_type,
            {"output_format": context.get_node_parameter("outputFormat", item_index, None)},
            additional_options=self.get_additional_options(context, item_index),
        )

    @classmethod
    def get_description(cls) -> str:
        return "Convert a file to a different format"
