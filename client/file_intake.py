"""Collect image files from a picker, a folder, or a drop, and encode them for upload.

Every entry point keeps image files only. Detection sniffs the file
content with Pillow, so a PNG renamed to `.txt` is kept and a text file
renamed to `.jpg` is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

import aiofiles

from models.image_record import UploadedFile
from services.thumbnail_generator import ThumbnailGenerator
from utils.media_validation import sniff_image_path, to_data_uri

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class FileCandidate:
    """An image file accepted for analysis but not yet read.

    Attributes:
        path: Location of the file on disk.
        mime_type: MIME type sniffed from the content.
        relative_path: `<folder>/<sub path>` when picked from a folder, else None.
    """

    path: Path
    mime_type: str
    relative_path: Optional[str] = None

    @property
    def file_name(self) -> str:
        return self.path.name


def _candidate(path: Path, relative_path: Optional[str] = None) -> Optional[FileCandidate]:
    mime_type = sniff_image_path(path)
    if mime_type is None:
        LOGGER.debug("Skipping non-image file %s", path)
        return None
    return FileCandidate(path=path, mime_type=mime_type, relative_path=relative_path)


def collect_picked_files(paths: Iterable[PathLike]) -> List[FileCandidate]:
    """Return the image files among individually picked paths, in the given order."""
    candidates = []
    for raw in paths:
        candidate = _candidate(Path(raw))
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def collect_dropped(paths: Iterable[PathLike]) -> List[FileCandidate]:
    """Return the image files of a drop; directories in the drop are ignored."""
    return collect_picked_files(p for p in map(Path, paths) if not p.is_dir())


def collect_folder(root: PathLike) -> List[FileCandidate]:
    """Recursively collect images under `root`, keeping `<root name>/<sub path>`.

    Raises:
        NotADirectoryError: If `root` is not a directory.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {root_path}")

    candidates = []
    for path in sorted(root_path.rglob("*")):
        if not path.is_file():
            continue
        relative = Path(root_path.resolve().name) / path.relative_to(root_path)
        candidate = _candidate(path, relative.as_posix())
        if candidate is not None:
            candidates.append(candidate)
    return candidates


async def prepare_upload(
    candidate: FileCandidate, thumbnails: Optional[ThumbnailGenerator] = None
) -> UploadedFile:
    """Read a candidate asynchronously and build its data URI and preview.

    Raises:
        OSError: If the file cannot be read.
    """
    async with aiofiles.open(candidate.path, "rb") as handle:
        data = await handle.read()

    preview: Optional[str] = None
    generator = thumbnails or ThumbnailGenerator()
    try:
        # Pillow work is blocking -> run in thread
        preview = await asyncio.to_thread(generator.create_preview, data)
    except ValueError as exc:
        LOGGER.warning("No preview for %s: %s", candidate.file_name, exc)

    return UploadedFile(
        file_name=candidate.file_name,
        mime_type=candidate.mime_type,
        data_uri=to_data_uri(data, candidate.mime_type),
        preview=preview,
        relative_path=candidate.relative_path,
    )
