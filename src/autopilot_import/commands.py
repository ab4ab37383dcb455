"""Default startup command detection for imported projects."""

import json
import logging
from datetime import datetime, timezone

from .artifact import encode_shell_actions
from .core import ConversationMessage, ImportedFile, generate_id

logger = logging.getLogger(__name__)

# Checked in order; the first script present is used to start the app
PREFERRED_SCRIPTS = ("dev", "start", "preview")


def detect_project_commands(files: list[ImportedFile]) -> list[str]:
    """Infer the shell commands needed to run the project.

    Returns an empty list when no way to start the project is recognised.
    """
    by_path = {f.path: f for f in files}

    package_json = by_path.get("package.json")
    if package_json is not None:
        try:
            package = json.loads(package_json.content)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse package.json: %s", e)
            return []
        scripts = package.get("scripts") if isinstance(package, dict) else None
        if not isinstance(scripts, dict):
            return []
        for script in PREFERRED_SCRIPTS:
            if script in scripts:
                return ["npm install", f"npm run {script}"]
        return []

    if "index.html" in by_path:
        return ["npx --yes serve"]

    return []


def create_commands_message(commands: list[str]) -> ConversationMessage | None:
    """Build the assistant message that runs ``commands``, if there are any."""
    if not commands:
        return None
    return ConversationMessage(
        role="assistant",
        content=encode_shell_actions(commands),
        id=generate_id(),
        created_at=datetime.now(timezone.utc),
    )
