"""Fake remote service shared by the tests."""

import json
from typing import Any, Dict, List, Optional

import httpx

API_URL = "https://api.test"
SYNC_API_URL = "https://sync.test"
UPLOAD_URL = "https://upload.test/form"
STORAGE_URL = "https://storage.test"


def upload_task(name: str, task_id: str) -> Dict[str, Any]:
    return {
        "id": task_id,
        "name": name,
        "operation": "import/upload",
        "status": "waiting",
        "result": {
            "form": {
                "url": f"{UPLOAD_URL}/{task_id}",
                "parameters": {"expires": "1700000000", "signature": f"sig-{task_id}"},
            }
        },
    }


def export_task(name: str, files: List[str], status: str = "finished") -> Dict[str, Any]:
    return {
        "id": f"id-{name}",
        "name": name,
        "operation": "export/url",
        "status": status,
        "result": {"files": [{"filename": f, "url": f"{STORAGE_URL}/{f}"} for f in files]},
    }


class FakeCloudConvert:
    """
    In-memory CloudConvert: records every request and answers job creation,
    uploads, the blocking wait and downloads.

    ``finished_jobs`` is a list of job payloads returned, in order, by the
    successive waits.
    """

    def __init__(self, finished_jobs: Optional[List[Dict[str, Any]]] = None):
        self.finished_jobs = list(finished_jobs or [])
        self.requests: List[httpx.Request] = []
        self.created_tasks: List[Dict[str, Any]] = []
        self.uploads: List[bytes] = []
        self.files: Dict[str, tuple] = {}
        self.job_count = 0

    def add_file(self, filename: str, content: bytes, content_type: str) -> None:
        self.files[filename] = (content, content_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if request.method == "POST" and url == f"{API_URL}/v2/jobs":
            body = json.loads(request.content)
            self.created_tasks.append(body["tasks"])
            self.job_count += 1
            job_id = f"job-{self.job_count}"
            tasks = []
            upload_index = 0
            for name, descriptor in body["tasks"].items():
                if descriptor["operation"] == "import/upload":
                    tasks.append(upload_task(name, f"{job_id}-up{upload_index}"))
                    upload_index += 1
                else:
                    tasks.append({"name": name, "operation": descriptor["operation"]})
            return httpx.Response(
                201, json={"data": {"id": job_id, "tag": body["tag"], "tasks": tasks}}
            )

        if request.method == "POST" and url.startswith(UPLOAD_URL):
            self.uploads.append(request.read())
            return httpx.Response(201)

        if request.method == "GET" and url.startswith(f"{SYNC_API_URL}/v2/jobs/"):
            return httpx.Response(200, json={"data": self.finished_jobs.pop(0)})

        if request.method == "GET" and url.startswith(STORAGE_URL):
            filename = url.rsplit("/", 1)[1]
            content, content_type = self.files[filename]
            return httpx.Response(200, content=content, headers={"content-type": content_type})

        return httpx.Response(404, json={"message": "not found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def finished_job(
    job_id: str,
    *exports: Dict[str, Any],
    operation: str = "convert",
    uploads: tuple = ("cc-upload",),
) -> Dict[str, Any]:
    """
    A finished job as the sync API reports it: every task is listed, and
    upload and process tasks name their files without a download URL.
    """
    tasks = [
        {
            "id": f"id-{name}",
            "name": name,
            "operation": "import/upload",
            "status": "finished",
            "result": {"files": [{"filename": f"{name}.bin"}]},
        }
        for name in uploads
    ]
    tasks.append(
        {
            "id": "id-cc-process",
            "name": "cc-process",
            "operation": operation,
            "status": "finished",
            "result": {"files": [{"filename": "processed.bin", "size": 3}]},
        }
    )
    tasks.extend(exports)
    return {"id": job_id, "status": "finished", "tasks": tasks}
