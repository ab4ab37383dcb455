"""Assemble the synthetic chat history for an imported project."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .artifact import encode_artifact
from .commands import create_commands_message, detect_project_commands
from .core import ConversationMessage, ImportedFile, generate_id

logger = logging.getLogger(__name__)

CommandDetector = Callable[[list[ImportedFile]], list[str]]

START_REQUEST = "Start the application"


def _binary_files_note(binary_files: list[str]) -> str:
    if not binary_files:
        return ""
    listing = "\n".join(f"- {name}" for name in binary_files)
    return f"\n\nSkipped {len(binary_files)} binary files:\n{listing}"


def assemble_messages(
    project_name: str,
    artifact: str,
    file_count: int,
    binary_files: list[str],
    commands_message: Optional[ConversationMessage],
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = generate_id,
) -> list[ConversationMessage]:
    """Build the ordered message list for an import.

    The first two messages are always the import request and the assistant
    reply carrying ``artifact``.  A start request and ``commands_message``
    follow only when a commands message is given.
    """
    created_at = now or datetime.now(timezone.utc)

    user_message = ConversationMessage(
        role="user",
        content=f'Import the "{project_name}" project',
        id=id_factory(),
        created_at=created_at,
    )
    files_message = ConversationMessage(
        role="assistant",
        content=(
            f'I\'ve imported the contents of the "{project_name}" project '
            f"({file_count} files).{_binary_files_note(binary_files)}\n\n{artifact}"
        ),
        id=id_factory(),
        created_at=created_at,
    )

    messages = [user_message, files_message]

    if commands_message is not None:
        messages.append(ConversationMessage(role="user", content=START_REQUEST, id=id_factory()))
        messages.append(commands_message)

    return messages


def create_chat_from_files(
    files: list[ImportedFile],
    binary_files: list[str],
    project_name: str,
    detector: CommandDetector = detect_project_commands,
) -> list[ConversationMessage]:
    """Turn imported files into the chat history that replays the import."""
    commands = detector(files)
    if commands:
        logger.info("Detected startup commands for %s: %s", project_name, commands)

    return assemble_messages(
        project_name=project_name,
        artifact=encode_artifact(files),
        file_count=len(files),
        binary_files=binary_files,
        commands_message=create_commands_message(commands),
    )
