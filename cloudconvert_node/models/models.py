# cloudconvert_node/models/models.py
"""
Data models for the CloudConvert node.
Defines Pydantic models for remote job payloads, pipeline items and HTTP request/response schemas.
"""

import base64
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# ======================================================
# Remote job API
# ======================================================

TaskStatus = Literal["waiting", "processing", "finished", "error"]


class UploadForm(BaseModel):
    """One-time upload target returned for an ``import/upload`` task."""

    url: str = Field(..., description="URL the multipart form must be posted to")
    parameters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Form fields required by the upload target, in the order they must be sent",
    )


class TaskResultFile(BaseModel):
    """
    File listed in a task result.

    Every task of a finished job lists the files it handled; only files of
    ``export/url`` tasks carry a download ``url``.
    """

    model_config = ConfigDict(extra="allow")

    filename: str = Field(..., description="Name of the file")
    url: Optional[str] = Field(
        None, description="Temporary download URL (export/url tasks only)"
    )


class TaskResult(BaseModel):
    """Result payload of a task; its shape depends on the task operation."""

    model_config = ConfigDict(extra="allow")

    form: Optional[UploadForm] = Field(None, description="Upload target (import/upload tasks)")
    files: List[TaskResultFile] = Field(
        default_factory=list, description="Files handled by the task"
    )
    metadata: Optional[Dict[str, Any]] = Field(None, description="Metadata (metadata tasks)")


class Task(BaseModel):
    """
    One node of a remote job graph, as reported by the remote service.

    Attributes:
        id: Remote task identifier
        name: Caller-assigned name, unique within the job
        operation: Remote capability (import/upload, convert, export/url, ...)
        status: waiting, processing, finished or error
        code: Error code when status is error
        message: Error message when status is error
        result: Operation-specific result when finished
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="Remote task identifier")
    name: str = Field(..., description="Task name, unique within the job")
    operation: str = Field(..., description="Remote operation of the task")
    status: Optional[TaskStatus] = Field(None, description="Task status")
    code: Optional[str] = Field(None, description="Error code when the task failed")
    message: Optional[str] = Field(None, description="Error message when the task failed")
    result: Optional[TaskResult] = Field(None, description="Task result when finished")
    depends_on_task_ids: List[str] = Field(
        default_factory=list, description="Identifiers of the tasks this task depends on"
    )


class Job(BaseModel):
    """A submitted task graph tracked by its remote identifier."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Remote job identifier")
    tag: Optional[str] = Field(None, description="Tag the job was created with")
    status: TaskStatus = Field("waiting", description="Aggregate job status")
    tasks: List[Task] = Field(default_factory=list, description="Tasks in job-array order")


# ======================================================
# Pipeline items
# ======================================================


class BinaryData(BaseModel):
    """
    Named binary attachment of a pipeline item.

    ``data`` holds the file bytes as base64 text so items stay JSON-serialisable.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: str = Field("", description="Base64 encoded file content")
    mime_type: str = Field(
        "application/octet-stream", alias="mimeType", description="MIME type of the file"
    )
    file_name: Optional[str] = Field(
        None, alias="fileName", description="File name, required for uploads"
    )
    file_extension: Optional[str] = Field(
        None, alias="fileExtension", description="File extension without the dot"
    )
    file_size: Optional[int] = Field(
        None, alias="fileSize", description="Size of the decoded content in bytes"
    )

    @classmethod
    def from_bytes(
        cls, content: bytes, file_name: Optional[str], mime_type: str
    ) -> "BinaryData":
        extension = None
        if file_name and "." in file_name:
            extension = file_name.rsplit(".", 1)[1].lower()
        return cls(
            data=base64.b64encode(content).decode("ascii"),
            mime_type=mime_type,
            file_name=file_name,
            file_extension=extension,
            file_size=len(content),
        )

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


class InputItem(BaseModel):
    """Item handed to the node by the host pipeline."""

    json_data: Dict[str, Any] = Field(default_factory=dict, alias="json")
    binary: Dict[str, BinaryData] = Field(
        default_factory=dict, description="Named binary attachments"
    )
    parameters: Dict[str, Any] = Field(
        default_factory=dict, description="Per-item parameter values overriding the global ones"
    )

    model_config = ConfigDict(populate_by_name=True)


class PairedItem(BaseModel):
    item: int = Field(..., description="Index of the input item the output derives from")


class OutputItem(BaseModel):
    """Item produced by the node and handed back to the host pipeline."""

    json_data: Dict[str, Any] = Field(default_factory=dict, alias="json")
    binary: Optional[Dict[str, BinaryData]] = Field(
        None, description="Single attachment named 'data' holding a downloaded file"
    )
    paired_item: Optional[PairedItem] = Field(
        None,
        alias="pairedItem",
        description="Link to the originating input item, absent for many-to-one outputs",
    )

    model_config = ConfigDict(populate_by_name=True)


# ======================================================
# HTTP boundary
# ======================================================


class Credentials(BaseModel):
    """Outbound credential material supplied by the host."""

    api_key: Optional[str] = Field(None, description="CloudConvert API key (apiKey authentication)")
    access_token: Optional[str] = Field(
        None, description="OAuth2 access token (oAuth2 authentication)"
    )
    token_type: str = Field("Bearer", description="OAuth2 token type")


class ExecutionRequest(BaseModel):
    """
    Execution of one node run over a batch of pipeline items.

    Attributes:
        operation: convert, merge, archive, thumbnail, optimize, watermark, metadata or capture-website
        authentication: apiKey or oAuth2
        credentials: Credential material, defaults to the configured one
        parameters: Global parameter values
        items: Input items
    """

    operation: str = Field(..., description="Operation to run")
    authentication: Literal["apiKey", "oAuth2"] = Field(
        "apiKey", description="Authentication type used against the remote API"
    )
    credentials: Optional[Credentials] = Field(None, description="Outbound credential material")
    parameters: Dict[str, Any] = Field(default_factory=dict, description="Global parameters")
    items: List[InputItem] = Field(default_factory=list, description="Input items")


class ExecutionResponse(BaseModel):
    """Outcome of an execution; ``items`` holds outputs produced before any failure."""

    success: bool = Field(..., description="Whether every unit of work completed")
    operation: str = Field(..., description="Operation that was run")
    items: List[OutputItem] = Field(default_factory=list, description="Output items")
    error: Optional[str] = Field(None, description="User-facing error message")
    error_type: Optional[str] = Field(None, description="Class name of the error")
    failed_item_index: Optional[int] = Field(
        None, description="Index of the input item whose processing failed"
    )


class OutputFormatsResponse(BaseModel):
    operation: str = Field(..., description="Remote operation queried")
    input_format: Optional[str] = Field(None, description="Input format filter, if any")
    output_formats: List[str] = Field(default_factory=list, description="Selectable formats")
