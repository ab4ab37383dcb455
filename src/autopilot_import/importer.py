"""Import orchestrators: remote autopilot projects and local folders."""

import logging
from datetime import datetime, timezone
from pathlib import Path

import httpx

from .backends.autopilot import AutopilotClient, AutopilotSource
from .backends.folder import FolderSource
from .chat import CommandDetector, create_chat_from_files
from .commands import detect_project_commands
from .config import RemoteConfig
from .core import ChatHistoryItem, ConversationMessage, ImportedFile
from .provider import ProjectSource

logger = logging.getLogger(__name__)


async def import_from_source(
    source: ProjectSource,
    detector: CommandDetector = detect_project_commands,
) -> list[ConversationMessage]:
    """Read every file from ``source`` and build its chat history."""
    project_name = await source.get_project_name()
    files = await source.read_files()
    logger.info("Read %d files from %s source %r", len(files), source.name, project_name)
    return create_chat_from_files(files, source.get_binary_files(), project_name, detector)


async def fetch_project_files(
    project_hex: str,
    config: RemoteConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[str, list[ImportedFile]]:
    """Resolve a remote project and download all of its files."""
    async with AutopilotClient(config, transport=transport) as client:
        source = AutopilotSource(client, project_hex)
        project_name = await source.get_project_name()
        files = await source.read_files()
    return project_name, files


async def import_remote_project(
    project_hex: str,
    config: RemoteConfig,
    transport: httpx.AsyncBaseTransport | None = None,
    detector: CommandDetector = detect_project_commands,
) -> ChatHistoryItem:
    """Import an autopilot project as a ready-to-open chat session."""
    project_name, files = await fetch_project_files(project_hex, config, transport=transport)
    messages = create_chat_from_files(files, [], project_name, detector)

    return ChatHistoryItem(
        id=project_hex,
        url_id=project_hex,
        description=project_name,
        messages=messages,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


async def import_local_folder(
    root: Path,
    folder_name: str | None = None,
    detector: CommandDetector = detect_project_commands,
) -> list[ConversationMessage]:
    """Import a local folder; the caller wraps the messages into a session."""
    return await import_from_source(FolderSource(root, folder_name), detector)
