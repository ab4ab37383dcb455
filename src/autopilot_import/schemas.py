"""Pydantic schemas for records returned by the autopilot service."""

from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .errors import MalformedUpstreamResponse, NotFound


class ProjectDescriptor(BaseModel):
    model_config = ConfigDict(extra="ignore")

    project_name: str
    status: str | None = None
    client_id: str | None = None
    unique_projectname: str | None = None
    project_mode: str | None = None
    last_update_time: str | None = None


class DocumentDescriptor(BaseModel):
    model_config = ConfigDict(extra="ignore")

    file_name: str
    blob_dir: str
    sub_dir: str | None = None
    document_id: int | str | None = None
    document_type: str | None = None
    action: str | None = None
    datetime: str | None = None

    @property
    def path(self) -> str:
        """Relative path of the document within the project."""
        sub_dir = (self.sub_dir or "").strip("/")
        if sub_dir:
            return f"{sub_dir}/{self.file_name}"
        return self.file_name


_document_list = TypeAdapter(list[DocumentDescriptor])


def parse_project(data: Any, project_hex: str) -> ProjectDescriptor:
    """Validate the get_projects response body and return its first record.

    The service answers with a list; an empty one means the project does
    not exist.
    """
    if not isinstance(data, list):
        raise MalformedUpstreamResponse(
            "Unexpected response format: Expected a non-empty list"
        )
    if not data:
        raise NotFound(project_hex)
    try:
        return ProjectDescriptor.model_validate(data[0])
    except ValidationError as e:
        raise MalformedUpstreamResponse(f"Invalid project record: {e}") from e


def parse_document_list(data: Any) -> list[DocumentDescriptor]:
    """Validate the retrieve_raw_html_files response body."""
    if not isinstance(data, list):
        raise MalformedUpstreamResponse(
            "Unexpected response format: Expected a list of documents"
        )
    try:
        return _document_list.validate_python(data)
    except ValidationError as e:
        raise MalformedUpstreamResponse(f"Invalid document record: {e}") from e
