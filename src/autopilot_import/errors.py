"""Error kinds raised by the import pipeline.

Every failure aborts the import in progress and propagates to the caller;
nothing in the pipeline retries or degrades to a partial result.
"""


class ImportFailure(Exception):
    """Base class for all import errors."""


class ConfigurationError(ImportFailure):
    """Required configuration is missing or invalid."""


class NotFound(ImportFailure):
    """The project identifier has no matching record."""

    def __init__(self, project_hex: str):
        self.project_hex = project_hex
        super().__init__(f"Project not found: {project_hex}")


class MalformedUpstreamResponse(ImportFailure):
    """The upstream service returned an unexpected shape."""


class DuplicatePath(ImportFailure):
    """Two files in one import resolved to the same relative path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Duplicate file path in import: {path}")


class Unreachable(ImportFailure):
    """An upstream call failed or returned a non-success status."""

    def __init__(self, url: str, status: int | None = None, reason: str = ""):
        self.url = url
        self.status = status
        if status is not None:
            message = f"HTTP error! status: {status} ({url})"
        else:
            message = f"Upstream unreachable: {url}: {reason}"
        super().__init__(message)


class FetchFailed(ImportFailure):
    """The content of one remote file could not be retrieved."""

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        super().__init__(f"Failed to fetch {file_name}: {reason}")


class DecodeError(ImportFailure):
    """A local file could not be read as text."""

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        super().__init__(f"Failed to decode {file_name}: {reason}")


class InvalidRequest(ImportFailure):
    """The import request is missing or carries an invalid identifier."""


class MethodNotAllowed(ImportFailure):
    """The import endpoint was called with a method other than POST."""

    def __init__(self):
        super().__init__("Method Not Allowed")
