"""Abstract base class for project sources."""

from abc import ABC, abstractmethod

from .core import ImportedFile


class ProjectSource(ABC):
    """Base class for places a project can be imported from.

    Each source (a remote autopilot project, a local folder) implements this
    interface so the downstream encode/assemble path is shared.
    """

    name: str  # "autopilot", "folder"

    @abstractmethod
    async def get_project_name(self) -> str:
        """Return the display name of the project."""
        ...

    @abstractmethod
    async def read_files(self) -> list[ImportedFile]:
        """Return every text file of the project, in a stable order."""
        ...

    def get_binary_files(self) -> list[str]:
        """Return the names of files skipped because they are binary."""
        return []
