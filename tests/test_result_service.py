import httpx
import pytest

from cloudconvert_node.core.context import ExecutionContext
from cloudconvert_node.models.models import Job, TaskResultFile
from cloudconvert_node.services.cloudconvert_client import CloudConvertClient
from cloudconvert_node.services.result_service import (
    download_output_file,
    get_job_export_urls,
    get_job_metadata,
)
from fakes import export_task


def test_export_urls_only_from_finished_exports_in_order():
    job = Job.model_validate(
        {
            "id": "job-1",
            "status": "finished",
            "tasks": [
                export_task("cc-export-a", ["page-1.png", "page-2.png"]),
                export_task("cc-export-b", ["ignored.png"], status="error"),
                {
                    "name": "cc-process",
                    "operation": "convert",
                    "status": "finished",
                    "result": {"files": [{"filename": "x.png", "url": "https://x"}]},
                },
                export_task("cc-export-c", ["page-3.png"]),
            ],
        }
    )

    assert [f.filename for f in get_job_export_urls(job)] == [
        "page-1.png",
        "page-2.png",
        "page-3.png",
    ]


def test_job_metadata():
    job = Job.model_validate(
        {
            "id": "job-1",
            "tasks": [
                {
                    "name": "cc-process",
                    "operation": "metadata",
                    "status": "finished",
                    "result": {"metadata": {"PageCount": 3, "Author": "Ada"}},
                }
            ],
        }
    )

    assert get_job_metadata(job) == {"PageCount": 3, "Author": "Ada"}
    assert get_job_metadata(Job(id="job-2")) == {}


@pytest.mark.asyncio
async def test_download_uses_response_content_type():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(
            200, content=b"%PDF", headers={"content-type": "application/pdf; charset=binary"}
        )

    client = CloudConvertClient(transport=httpx.MockTransport(handler))
    exported = TaskResultFile(filename="out.pdf", url="https://storage.test/out.pdf")

    binary = await download_output_file(client, ExecutionContext([]), exported)

    assert seen["auth"] is None
    assert binary.to_bytes() == b"%PDF"
    assert binary.mime_type == "application/pdf"
    assert binary.file_name == "out.pdf"
    assert binary.file_extension == "pdf"
    assert binary.file_size == 4


@pytest.mark.asyncio
async def test_download_failure_raises_http_error():
    client = CloudConvertClient(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    exported = TaskResultFile(filename="out.pdf", url="https://storage.test/out.pdf")

    with pytest.raises(httpx.HTTPStatusError):
        await download_output_file(client, ExecutionContext([]), exported)


def test_export_urls_skip_files_without_url():
    job = Job.model_validate(
        {
            "id": "job-1",
            "status": "finished",
            "tasks": [
                {
                    "name": "cc-upload",
                    "operation": "import/upload",
                    "status": "finished",
                    "result": {"files": [{"filename": "in.docx"}]},
                },
                {
                    "name": "cc-export",
                    "operation": "export/url",
                    "status": "finished",
                    "result": {
                        "files": [
                            {"filename": "pending.pdf"},
                            {"filename": "out.pdf", "url": "https://storage.test/out.pdf"},
                        ]
                    },
                },
            ],
        }
    )

    assert [f.filename for f in get_job_export_urls(job)] == ["out.pdf"]
