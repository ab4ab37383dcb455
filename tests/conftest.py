"""Shared test fixtures for autopilot-import."""

import asyncio
import json

import httpx
import pytest

from autopilot_import.config import RemoteConfig

BASE_URL = "http://autopilot.test"
PROJECT_HEX = "abc123"


@pytest.fixture
def demo_folder(tmp_path):
    """Create a picked folder named "demo" with two text files."""
    root = tmp_path / "demo"
    root.mkdir()
    (root / "index.html").write_text("<h1>Hi</h1>", encoding="utf-8")
    (root / "style.css").write_text("body{}", encoding="utf-8")
    return root


@pytest.fixture
def node_folder(tmp_path):
    """Create a small Node project with nested files, a binary and ignored dirs."""
    root = tmp_path / "shop"
    (root / "src" / "components").mkdir(parents=True)
    (root / "node_modules" / "react").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "public").mkdir()

    package = {"name": "shop", "scripts": {"build": "vite build", "dev": "vite"}}
    (root / "package.json").write_text(json.dumps(package), encoding="utf-8")
    (root / "src" / "main.js").write_text("import './app.js';\n", encoding="utf-8")
    (root / "src" / "components" / "Cart.jsx").write_text(
        "export const Cart = () => <div>cart</div>;\n", encoding="utf-8"
    )
    (root / "public" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    (root / "node_modules" / "react" / "index.js").write_text("module.exports = {};", encoding="utf-8")
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    return root


@pytest.fixture
def remote_config():
    return RemoteConfig(base_url=BASE_URL, timeout=5.0, max_concurrency=4)


class FakeAutopilot:
    """In-memory stand-in for the autopilot service, served via MockTransport."""

    def __init__(self):
        self.projects = {
            PROJECT_HEX: [
                {
                    "client_id": "client-1",
                    "unique_projectname": "landing-abc123",
                    "project_name": "Landing Page",
                    "status": "complete",
                    "autopilot": True,
                }
            ]
        }
        self.documents = {
            PROJECT_HEX: [
                {
                    "file_name": "index.html",
                    "sub_dir": "",
                    "blob_dir": "abc123/index.html",
                    "document_id": 1,
                    "document_type": "html",
                },
                {
                    "file_name": "about.html",
                    "sub_dir": "",
                    "blob_dir": "abc123/about.html",
                    "document_id": 2,
                    "document_type": "html",
                },
            ]
        }
        self.blobs = {
            "abc123/index.html": "<h1>Welcome</h1>",
            "abc123/about.html": "<p>About us</p>",
        }
        self.blob_status = {}
        self.blob_delay = {}
        self.status_override = {}
        self.requests = []
        self.completed_blobs = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        for prefix, status in self.status_override.items():
            if path.startswith(prefix):
                return httpx.Response(status, text="upstream error")

        if path == "/database/get_projects":
            project_hex = request.url.params.get("project_hex")
            return httpx.Response(200, json=self.projects.get(project_hex, []))

        if path.startswith("/database/retrieve_raw_html_files/"):
            project_hex = path.rsplit("/", 1)[-1]
            return httpx.Response(200, json=self.documents.get(project_hex, []))

        prefix = "/azure_storage/get_blob/"
        if path.startswith(prefix):
            blob_dir = path[len(prefix):]
            delay = self.blob_delay.get(blob_dir)
            if delay:
                await asyncio.sleep(delay)
            status = self.blob_status.get(blob_dir, 200)
            if status != 200 or blob_dir not in self.blobs:
                return httpx.Response(status if status != 200 else 404, text="blob not found")
            self.completed_blobs.append(blob_dir)
            return httpx.Response(200, text=self.blobs[blob_dir])

        return httpx.Response(404, text="no route")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_autopilot():
    return FakeAutopilot()
