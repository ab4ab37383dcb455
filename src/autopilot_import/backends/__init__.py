"""Project sources: the remote autopilot service and local folders."""

from .autopilot import AutopilotClient, AutopilotSource
from .folder import FolderSource, collect_folder, read_folder_files

__all__ = [
    "AutopilotClient",
    "AutopilotSource",
    "FolderSource",
    "collect_folder",
    "read_folder_files",
]
