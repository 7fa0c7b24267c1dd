# cloudconvert_node/services/job_builder.py
"""
Job graph construction for CloudConvert jobs.

Builds the ``tasks`` mapping (task name -> task descriptor) sent on job
creation. Descriptors are plain dicts because additional options can merge
arbitrary keys into them; the remote service is the schema authority.
"""

import copy
import json
from typing import Any, Dict, List, Mapping, Optional, Union

from cloudconvert_node.core.config import config
from cloudconvert_node.core.exceptions import InvalidParameterError, JobGraphError

TaskDescriptor = Dict[str, Any]
TaskGraph = Dict[str, TaskDescriptor]

IMPORT_UPLOAD = "import/upload"
IMPORT_URL = "import/url"
EXPORT_URL = "export/url"

# Optional process fields per operation, in the order they are written.
PROCESS_OPTIONS: Dict[str, tuple] = {
    "convert": ("output_format",),
    "thumbnail": ("output_format", "width", "height", "fit"),
    "optimize": ("profile",),
    "watermark": (
        "text",
        "font_size",
        "font_color",
        "position_vertical",
        "position_horizontal",
        "margin_vertical",
        "margin_horizontal",
        "opacity",
    ),
    "metadata": (),
    "capture-website": ("url", "output_format"),
    "merge": ("output_format",),
    "archive": ("output_format",),
}

REQUIRED_OPTIONS: Dict[str, tuple] = {
    "convert": ("output_format",),
    "thumbnail": ("output_format",),
    "capture-website": ("url", "output_format"),
    "merge": ("output_format",),
    "archive": ("output_format",),
}

MULTI_INPUT_OPERATIONS = frozenset({"merge", "archive"})
URL_SOURCED_OPERATIONS = frozenset({"capture-website"})
NO_EXPORT_OPERATIONS = frozenset({"metadata"})

SUPPORTED_OPERATIONS = tuple(PROCESS_OPTIONS)


def task_name(suffix: str) -> str:
    """Prefix a task name with the configured prefix (Ex: ``cc-process``)."""
    return f"{config.CLOUDCONVERT_TASK_PREFIX}{suffix}"


def is_set(value: Any) -> bool:
    """A parameter counts as supplied unless it is None or an empty string."""
    return value is not None and value != ""


def parse_additional_options(raw: Union[str, Mapping[str, Any], None]) -> Optional[Dict[str, Any]]:
    """
    Parse the free-form additional options of an item.

    Args:
        raw: JSON text, an already decoded object, or nothing

    Returns:
        The decoded object, or None when no options were supplied

    Raises:
        InvalidParameterError: The value is not a JSON object
    """
    if raw is None or raw == "" or raw == {}:
        return None
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, str):
        try:
            decoded = json.loads(raw)
        except ValueError:
            raise InvalidParameterError("Additional Options must be a valid JSON")
        if isinstance(decoded, dict):
            return decoded or None
    raise InvalidParameterError("Additional Options must be a valid JSON")


def merge_options(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge ``override`` into a copy of ``base``.

    Objects merge key by key; any other value (arrays included) from the
    override replaces the base value.
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_options(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _references(descriptor: Mapping[str, Any]) -> List[str]:
    refs = descriptor.get("input") or []
    if isinstance(refs, str):
        refs = [refs]
    refs = list(refs)
    # A watermark image is an input task referenced by name
    if descriptor.get("operation") == "watermark" and isinstance(descriptor.get("image"), str):
        refs.append(descriptor["image"])
    return refs


def validate_task_graph(tasks: Mapping[str, Mapping[str, Any]]) -> List[str]:
    """Validate a task graph. Returns a list of errors (empty = valid)."""
    errors = []

    if not tasks:
        return ["Job must contain at least one task"]

    for name, descriptor in tasks.items():
        if "operation" not in descriptor:
            errors.append(f"Task '{name}' must have an 'operation' field")
        for ref in _references(descriptor):
            if ref not in tasks:
                errors.append(f"Task '{name}' has unknown input: '{ref}'")

    if not errors and _has_cycle(tasks):
        errors.append("Job contains a cycle")

    return errors


def _has_cycle(tasks: Mapping[str, Mapping[str, Any]]) -> bool:
    """Detect cycles using DFS with three-color marking."""
    adj = {name: _references(descriptor) for name, descriptor in tasks.items()}
    WHITE, GRAY, BLACK = 0, 1, 2
    color = {name: WHITE for name in adj}

    def dfs(node):
        color[node] = GRAY
        for neighbor in adj[node]:
            if color[neighbor] == GRAY:
                return True
            if color[neighbor] == WHITE and dfs(neighbor):
                return True
        color[node] = BLACK
        return False

    for node in adj:
        if color[node] == WHITE:
            if dfs(node):
                return True
    return False


def _process_fields(operation: str, options: Mapping[str, Any]) -> Dict[str, Any]:
    for key in REQUIRED_OPTIONS.get(operation, ()):
        if not is_set(options.get(key)):
            raise InvalidParameterError(f"Parameter '{key}' is required for {operation}")

    return {key: options[key] for key in PROCESS_OPTIONS[operation] if is_set(options.get(key))}


def build_job_tasks(
    operation: str,
    options: Optional[Mapping[str, Any]] = None,
    *,
    input_count: int = 1,
    additional_options: Optional[Mapping[str, Any]] = None,
    watermark_image_url: Optional[str] = None,
) -> TaskGraph:
    """
    Build the task graph of one job.

    Args:
        operation: Pipeline operation (convert, merge, archive, thumbnail, ...)
        options: Resolved parameter values; unset values are left out of the payload
        input_count: Number of uploads for merge/archive, ignored otherwise
        additional_options: Decoded free-form options merged into the process task
        watermark_image_url: Image imported by URL and stamped by a watermark

    Returns:
        TaskGraph: Mapping from task name to task descriptor, in creation order

    Raises:
        InvalidParameterError: Unknown operation or missing required value
        JobGraphError: The resulting graph is not a valid DAG
    """
    if operation not in PROCESS_OPTIONS:
        raise InvalidParameterError(f"The operation '{operation}' is not supported")

    options = options or {}
    tasks: TaskGraph = {}
    process: TaskDescriptor = {}

    if operation in MULTI_INPUT_OPERATIONS:
        if input_count < 1:
            raise InvalidParameterError(f"{operation} needs at least one input item")
        for i in range(input_count):
            tasks[task_name(f"upload-{i}")] = {"operation": IMPORT_UPLOAD}
        process["input"] = list(tasks)
    elif operation not in URL_SOURCED_OPERATIONS:
        tasks[task_name("upload")] = {"operation": IMPORT_UPLOAD}
        process["input"] = task_name("upload")

    process["operation"] = operation
    process.update(_process_fields(operation, options))

    if operation == "watermark" and is_set(watermark_image_url):
        tasks[task_name("watermark-image")] = {"operation": IMPORT_URL, "url": watermark_image_url}
        process["image"] = task_name("watermark-image")

    if additional_options:
        process = merge_options(process, additional_options)

    tasks[task_name("process")] = process

    if operation not in NO_EXPORT_OPERATIONS:
        tasks[task_name("export")] = {"input": task_name("process"), "operation": EXPORT_URL}

    errors = validate_task_graph(tasks)
    if errors:
        raise JobGraphError("; ".join(errors))

    return tasks
