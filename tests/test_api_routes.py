import httpx
import pytest
from fastapi.testclient import TestClient

from cloudconvert_node.core.exceptions import InvalidParameterError, JobFailedError
from cloudconvert_node.main import app
from cloudconvert_node.models.models import BinaryData, Job, OutputItem, PairedItem


@pytest.fixture(autouse=True)
def auth_override():
    app.dependency_overrides.clear()
    from cloudconvert_node.core.auth import get_current_caller

    app.dependency_overrides[get_current_caller] = lambda: "node-token"
    yield
    app.dependency_overrides.clear()


def _stub_execution(monkeypatch, result):
    from cloudconvert_node.api.routes import task as task_module

    captured = {}

    async def _fake_execute(request):
        captured["request"] = request
        return result

    monkeypatch.setattr(task_module.task_dispatcher, "execute_request", _fake_execute)
    return captured


def test_root():
    with TestClient(app) as client:
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["health_check"] == "/runner/health"


def test_health():
    with TestClient(app) as client:
        resp = client.get("/runner/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


def test_operations():
    with TestClient(app) as client:
        resp = client.get("/runner/operations")
        assert resp.status_code == 200
        assert "merge" in resp.json()["operations"]


def test_execute_success(monkeypatch):
    captured = _stub_execution(
        monkeypatch,
        {
            "success": True,
            "operation": "metadata",
            "items": [OutputItem(json={"PageCount": 1}, paired_item=PairedItem(item=0))],
        },
    )

    with TestClient(app) as client:
        resp = client.post(
            "/task/execute",
            json={
                "operation": "metadata",
                "items": [{"json": {"id": 1}, "binary": {}}],
            },
        )

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["items"][0]["json"] == {"PageCount": 1}
    assert body["items"][0]["pairedItem"] == {"item": 0}
    assert captured["request"].items[0].json_data == {"id": 1}
    assert captured["request"].authentication == "apiKey"


def test_execute_uses_camel_case_item_fields(monkeypatch):
    captured = _stub_execution(
        monkeypatch,
        {
            "success": True,
            "operation": "convert",
            "items": [
                OutputItem(
                    json={},
                    binary={"data": BinaryData.from_bytes(b"%PDF", "out.pdf", "application/pdf")},
                    paired_item=PairedItem(item=0),
                )
            ],
        },
    )

    with TestClient(app) as client:
        resp = client.post(
            "/task/execute",
            json={
                "operation": "convert",
                "items": [
                    {
                        "json": {},
                        "binary": {
                            "data": {
                                "data": "SGVsbG8=",
                                "mimeType": "text/plain",
                                "fileName": "hello.txt",
                            }
                        },
                    }
                ],
            },
        )

    assert resp.status_code == 200
    received = captured["request"].items[0].binary["data"]
    assert received.file_name == "hello.txt"
    assert received.mime_type == "text/plain"
    item = resp.json()["items"][0]
    assert item["pairedItem"] == {"item": 0}
    assert item["binary"]["data"]["fileName"] == "out.pdf"
    assert item["binary"]["data"]["mimeType"] == "application/pdf"
    assert item["binary"]["data"]["fileSize"] == 4


def test_execute_invalid_input_is_400(monkeypatch):
    error = InvalidParameterError("No file name given for input file.")
    _stub_execution(
        monkeypatch,
        {
            "success": False,
            "operation": "convert",
            "items": [],
            "error": str(error),
            "error_type": "InvalidParameterError",
            "failed_item_index": 0,
            "exception": error,
        },
    )

    with TestClient(app) as client:
        resp = client.post("/task/execute", json={"operation": "convert"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "No file name given for input file."
    assert resp.json()["failed_item_index"] == 0


def test_execute_remote_failure_is_502_with_partial_items(monkeypatch):
    error = JobFailedError("boom (Code: E1)", Job(id="job-2", status="error"))
    _stub_execution(
        monkeypatch,
        {
            "success": False,
            "operation": "convert",
            "items": [OutputItem(json={}, paired_item=PairedItem(item=0))],
            "error": str(error),
            "error_type": "JobFailedError",
            "failed_item_index": 1,
            "exception": error,
        },
    )

    with TestClient(app) as client:
        resp = client.post("/task/execute", json={"operation": "convert"})

    assert resp.status_code == 502
    body = resp.json()
    assert body["error"] == "boom (Code: E1)"
    assert len(body["items"]) == 1


def test_execute_rejects_unknown_authentication():
    with TestClient(app) as client:
        resp = client.post("/task/execute", json={"operation": "convert", "authentication": "basic"})
    assert resp.status_code == 422


def test_execute_requires_token():
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        resp = client.post("/task/execute", json={"operation": "convert"})
    assert resp.status_code == 401


def test_output_formats(monkeypatch):
    from cloudconvert_node.api.routes import task as task_module

    async def _fake_formats(self, operation, input_format=None):
        assert operation == "convert"
        assert input_format == "docx"
        return ["html", "pdf"]

    monkeypatch.setattr(task_module.CloudConvertClient, "get_output_formats", _fake_formats)

    with TestClient(app) as client:
        resp = client.get("/task/formats/convert", params={"input_format": "docx"})

    assert resp.status_code == 200
    assert resp.json() == {
        "operation": "convert",
        "input_format": "docx",
        "output_formats": ["html", "pdf"],
    }


def test_output_formats_remote_failure(monkeypatch):
    from cloudconvert_node.api.routes import task as task_module

    async def _failing(self, operation, input_format=None):
        raise httpx.ConnectError("unreachable")

    monkeypatch.setattr(task_module.CloudConvertClient, "get_output_formats", _failing)

    with TestClient(app) as client:
        resp = client.get("/task/formats/convert")

    assert resp.status_code == 502


def test_openapi_schema_has_security_and_example():
    with TestClient(app) as client:
        schema = client.get("/openapi.json").json()

    assert "APIKeyHeader" in schema["components"]["securitySchemes"]
    assert schema["components"]["schemas"]["ExecutionRequest"]["example"]["operation"] == "convert"
    assert {tag["name"] for tag in schema["tags"]} == {"Runner", "Task"}
