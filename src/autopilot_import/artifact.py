"""Encode imported files into the bolt artifact markup.

An artifact looks like::

    <boltArtifact id="imported-files" title="Imported Files" type="bundled">
    <boltAction type="file" filePath="src/app.js">
    ...file content...
    </boltAction>
    </boltArtifact>

The chat renderer parses this text literally, so file content must never
contain something it would read as an artifact or action tag.  Escaping
turns the ``<`` of such a tag into ``&lt;`` and adds one ``amp;`` to text
that already looks like an escaped tag opener, which keeps the transform
reversible.
"""

import re

from .core import ImportedFile

IMPORTED_FILES_ID = "imported-files"
IMPORTED_FILES_TITLE = "Imported Files"
PROJECT_SETUP_ID = "project-setup"
PROJECT_SETUP_TITLE = "Project Setup"

_TAG_NAME = r"/?bolt(?:Artifact|Action)"
_ESCAPE_RE = re.compile(rf"(<|&(?:amp;)*lt;)(?={_TAG_NAME})")
_UNESCAPE_RE = re.compile(rf"&((?:amp;)*)lt;(?={_TAG_NAME})")

_FILE_ACTION_RE = re.compile(
    r'<boltAction type="file" filePath="([^"]*)">\n(.*?)\n</boltAction>',
    re.DOTALL,
)
_ARTIFACT_RE = re.compile(
    r'<boltArtifact id="([^"]*)" title="([^"]*)"[^>]*>\n(.*?)\n</boltArtifact>',
    re.DOTALL,
)


def _escape_match(match: re.Match) -> str:
    token = match.group(1)
    if token == "<":
        return "&lt;"
    return "&amp;" + token[1:]


def _unescape_match(match: re.Match) -> str:
    amps = match.group(1)
    if not amps:
        return "<"
    return "&" + amps[len("amp;"):] + "lt;"


def escape_bolt_tags(content: str) -> str:
    """Neutralize anything in ``content`` that would open a bolt tag."""
    return _ESCAPE_RE.sub(_escape_match, content)


def unescape_bolt_tags(content: str) -> str:
    """Inverse of :func:`escape_bolt_tags`."""
    return _UNESCAPE_RE.sub(_unescape_match, content)


def _quote_attr(value: str) -> str:
    # Written literally apart from the quote that would end the attribute
    return value.replace('"', "&quot;")


def _unquote_attr(value: str) -> str:
    return value.replace("&quot;", '"')


def encode_file_action(file: ImportedFile) -> str:
    return (
        f'<boltAction type="file" filePath="{_quote_attr(file.path)}">\n'
        f"{escape_bolt_tags(file.content)}\n"
        "</boltAction>"
    )


def encode_artifact(files: list[ImportedFile]) -> str:
    """Wrap every file in a single bundled artifact."""
    actions = "\n\n".join(encode_file_action(f) for f in files)
    return (
        f'<boltArtifact id="{IMPORTED_FILES_ID}" title="{IMPORTED_FILES_TITLE}" type="bundled">\n'
        f"{actions}\n"
        "</boltArtifact>"
    )


def encode_shell_actions(commands: list[str]) -> str:
    """Wrap shell commands in a project setup artifact."""
    actions = "\n".join(
        f'<boltAction type="shell">\n{escape_bolt_tags(cmd)}\n</boltAction>'
        for cmd in commands
    )
    return (
        f'<boltArtifact id="{PROJECT_SETUP_ID}" title="{PROJECT_SETUP_TITLE}">\n'
        f"{actions}\n"
        "</boltArtifact>"
    )


def parse_artifact(text: str, artifact_id: str = IMPORTED_FILES_ID) -> list[ImportedFile]:
    """Recover the files embedded in the artifact with ``artifact_id``.

    ``text`` may contain prose around the artifact, such as the assistant
    message that carries it.  Returns an empty list if no such artifact is
    present.
    """
    for match in _ARTIFACT_RE.finditer(text):
        if match.group(1) != artifact_id:
            continue
        return [
            ImportedFile(
                path=_unquote_attr(action.group(1)),
                content=unescape_bolt_tags(action.group(2)),
            )
            for action in _FILE_ACTION_RE.finditer(match.group(3))
        ]
    return []
