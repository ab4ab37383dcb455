"""Autopilot project backend.

Reads a project from the remote autopilot service.  Three endpoints are used:

- ``GET /database/get_projects?project_hex=<hex>``: list with the project
  record as its first element.
- ``GET /database/retrieve_raw_html_files/<hex>``: list of document
  descriptors, one per file.
- ``GET /azure_storage/get_blob/<blob_dir>``: raw text of one file.

Blob downloads run concurrently but results are always returned in the
order of the document list.
"""

import asyncio
import logging
from typing import Any

import httpx

from ..config import RemoteConfig
from ..core import ImportedFile
from ..errors import DuplicatePath, FetchFailed, MalformedUpstreamResponse, Unreachable
from ..provider import ProjectSource
from ..schemas import DocumentDescriptor, ProjectDescriptor, parse_document_list, parse_project

logger = logging.getLogger(__name__)


class AutopilotClient:
    """Async client for the autopilot service.

    Use as an async context manager; the underlying ``httpx.AsyncClient`` is
    owned by this object and closed on exit.
    """

    def __init__(self, config: RemoteConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AutopilotClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_project(self, project_hex: str) -> ProjectDescriptor:
        """Resolve the project record for ``project_hex``."""
        data = await self._get_json("/database/get_projects", params={"project_hex": project_hex})
        project = parse_project(data, project_hex)
        logger.info("Resolved project %s: %s", project_hex, project.project_name)
        return project

    async def list_documents(self, project_hex: str) -> list[DocumentDescriptor]:
        """Return the document descriptors that make up the project."""
        data = await self._get_json(f"/database/retrieve_raw_html_files/{project_hex}")
        documents = parse_document_list(data)
        logger.info("Project %s has %d documents", project_hex, len(documents))
        return documents

    async def fetch_blob(self, document: DocumentDescriptor) -> str:
        """Download the text content of one document."""
        url = f"/azure_storage/get_blob/{document.blob_dir}"
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.error("Blob fetch for %s failed: %s", document.path, e)
            raise FetchFailed(document.path, str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.error("Blob fetch for %s returned %d", document.path, response.status_code)
            raise FetchFailed(document.path, f"HTTP status {response.status_code}")

        logger.debug("Fetched %s (%d bytes)", document.path, len(response.content))
        return response.text

    async def fetch_documents(self, documents: list[DocumentDescriptor]) -> list[ImportedFile]:
        """Download every document concurrently, preserving input order."""
        _check_unique([d.path for d in documents])
        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def fetch(document: DocumentDescriptor) -> ImportedFile:
            async with semaphore:
                content = await self.fetch_blob(document)
            return ImportedFile(path=document.path, content=content)

        tasks = [asyncio.ensure_future(fetch(d)) for d in documents]
        try:
            # gather() returns results in argument order, whatever order they finish in
            return list(await asyncio.gather(*tasks))
        except Exception:
            for task in tasks:
                task.cancel()
            raise

    # ── Private helpers ──────────────────────────────────────────────

    async def _get_json(self, path: str, params: dict | None = None) -> Any:
        url = f"{self.config.base_url}{path}"
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", url, e)
            raise Unreachable(url, reason=str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.error("Request to %s returned %d", url, response.status_code)
            raise Unreachable(url, status=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedUpstreamResponse(f"Response from {url} is not valid JSON") from e


class AutopilotSource(ProjectSource):
    """Project source backed by an autopilot project."""

    name = "autopilot"

    def __init__(self, client: AutopilotClient, project_hex: str):
        self.client = client
        self.project_hex = project_hex

    async def get_project_name(self) -> str:
        project = await self.client.get_project(self.project_hex)
        return project.project_name

    async def read_files(self) -> list[ImportedFile]:
        documents = await self.client.list_documents(self.project_hex)
        return await self.client.fetch_documents(documents)


def _check_unique(paths: list[str]) -> None:
    seen = set()
    for path in paths:
        if path in seen:
            raise DuplicatePath(path)
        seen.add(path)
