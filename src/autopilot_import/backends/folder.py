"""Local folder backend.

Walks a directory picked by the user and decodes its text files.  Relative
paths are recorded the way a browser folder picker reports them, with the
picked directory as the first segment (``demo/src/app.js``); that segment is
stripped again when the file is imported.
"""

import asyncio
import logging
import os
from pathlib import Path

from ..core import ImportedFile, LocalFileHandle
from ..errors import DecodeError, DuplicatePath
from ..provider import ProjectSource

logger = logging.getLogger(__name__)

IGNORED_DIRS = {
    ".git",
    "node_modules",
    "dist",
    "build",
    ".cache",
    ".next",
    "coverage",
    "__pycache__",
    ".venv",
}

# Bytes sniffed to decide whether a file is binary
BINARY_SNIFF_SIZE = 8192


def is_binary_file(path: Path) -> bool:
    """Return True if ``path`` does not look like UTF-8 text."""
    with path.open("rb") as f:
        head = f.read(BINARY_SNIFF_SIZE)
    if b"\x00" in head:
        return True
    try:
        head.decode("utf-8")
    except UnicodeDecodeError as e:
        # A multi-byte sequence cut off by the sniff window is still text
        truncated = len(head) == BINARY_SNIFF_SIZE and e.reason == "unexpected end of data"
        return not truncated
    return False


def _walk_files(root: Path):
    """Yield every file under ``root``, never descending into ignored dirs."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in IGNORED_DIRS]
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def collect_folder(root: Path) -> tuple[list[LocalFileHandle], list[str]]:
    """Return the text file handles under ``root`` and the binary file names.

    Files are returned in sorted path order.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    handles = []
    binary_files = []

    for path in sorted(_walk_files(root), key=lambda p: p.relative_to(root).parts):
        rel_parts = path.relative_to(root).parts
        relative_path = "/".join((root.name, *rel_parts))
        try:
            binary = is_binary_file(path)
        except OSError as e:
            raise DecodeError(relative_path, str(e)) from e

        if binary:
            binary_files.append(relative_path)
        else:
            handles.append(LocalFileHandle(path=path, relative_path=relative_path))

    logger.info(
        "Collected %d text files and %d binary files from %s",
        len(handles), len(binary_files), root,
    )
    return handles, binary_files


def strip_root(handle: LocalFileHandle) -> str:
    """Drop the picked directory from a handle's relative path.

    Falls back to the bare file name when nothing is left.
    """
    stripped = "/".join(handle.relative_path.split("/")[1:])
    return stripped or handle.name


async def read_file_handle(handle: LocalFileHandle) -> ImportedFile:
    path = strip_root(handle)
    try:
        raw = await asyncio.to_thread(handle.path.read_bytes)
        # Decoded from bytes so line endings are kept as-is
        content = raw.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", handle.relative_path, e)
        raise DecodeError(handle.relative_path, str(e)) from e
    logger.debug("Read %s (%d chars)", path, len(content))
    return ImportedFile(path=path, content=content)


async def read_folder_files(
    handles: list[LocalFileHandle],
    binary_files: list[str] | tuple[str, ...] = (),
) -> list[ImportedFile]:
    """Decode every handle as text concurrently, preserving input order.

    Handles whose relative path is listed in ``binary_files`` are skipped;
    the classification is trusted as given.
    """
    skipped = set(binary_files)
    selected = [h for h in handles if h.relative_path not in skipped]

    tasks = [asyncio.ensure_future(read_file_handle(h)) for h in selected]
    try:
        files = list(await asyncio.gather(*tasks))
    except Exception:
        for task in tasks:
            task.cancel()
        raise

    seen = set()
    for f in files:
        if f.path in seen:
            raise DuplicatePath(f.path)
        seen.add(f.path)
    return files


class FolderSource(ProjectSource):
    """Project source backed by a local directory."""

    name = "folder"

    def __init__(self, root: Path, folder_name: str | None = None):
        self.root = Path(root)
        self.folder_name = folder_name or self.root.resolve().name
        self._handles: list[LocalFileHandle] | None = None
        self._binary_files: list[str] = []

    def _collect(self) -> list[LocalFileHandle]:
        if self._handles is None:
            self._handles, self._binary_files = collect_folder(self.root)
        return self._handles

    async def get_project_name(self) -> str:
        return self.folder_name

    async def read_files(self) -> list[ImportedFile]:
        return await read_folder_files(self._collect(), self._binary_files)

    def get_binary_files(self) -> list[str]:
        self._collect()
        return list(self._binary_files)
