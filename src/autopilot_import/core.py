"""Core data models for autopilot-import."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional


def generate_id() -> str:
    """Return a short random identifier for a chat message."""
    return uuid.uuid4().hex[:16]


@dataclass(frozen=True)
class ImportedFile:
    """A resolved file ready to be embedded in an artifact."""

    path: str  # relative, unique within one import
    content: str


@dataclass(frozen=True)
class LocalFileHandle:
    """A file picked from a local folder."""

    path: Path
    relative_path: str  # includes the picked root, e.g. "demo/src/app.js"

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class ConversationMessage:
    """A single turn in the synthetic chat history."""

    role: str  # "user" | "assistant"
    content: str
    id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class ChatHistoryItem:
    """An importable chat session."""

    id: str
    url_id: str
    description: str
    messages: list[ConversationMessage] = field(default_factory=list)
    timestamp: str = ""  # ISO-8601
