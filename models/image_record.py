from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

from models.analysis import AnalysisResult

UNGROUPED = "Ungrouped"


@dataclass
class UploadedFile:
    """One image selected by the user, ready to be sent for analysis.

    Attributes:
        file_name: Display name (last component of the path).
        relative_path: Folder-relative path when picked from a directory.
        mime_type: MIME type sniffed from the file content.
        data_uri: `data:<mime>;base64,...` payload sent to the API.
        preview: Locally renderable thumbnail as a PNG data URL.
    """

    file_name: str
    mime_type: str
    data_uri: str
    preview: Optional[str] = None
    relative_path: Optional[str] = None

    @property
    def folder_path(self) -> str:
        """Grouping key derived from the relative path."""
        return folder_key(self.relative_path)

    def release(self) -> None:
        """Drop the encoded bytes once the request has been sent."""
        self.data_uri = ""


@dataclass
class ImageRecord:
    """In-memory row of the review table.

    Attributes:
        file_name: Filename shown in the table and written to CSV.
        folder_path: Grouping key (see `folder_key`).
        preview: Thumbnail data URL, if one could be rendered.
        analysis: Result from the API; None until the request resolves.
        id: Unique identity of the record within a session.
    """

    file_name: str
    folder_path: str = UNGROUPED
    preview: Optional[str] = None
    analysis: Optional[AnalysisResult] = None
    id: str = field(default_factory=lambda: uuid4().hex)


def folder_key(relative_path: Optional[str]) -> str:
    """Return the directory portion of a relative path, or the ungrouped sentinel.

    `A/x.jpg` and `A/y.jpg` both map to `A`; `A/B/z.png` maps to `A/B`.
    """
    if not relative_path:
        return UNGROUPED
    parts = [part for part in relative_path.replace("\\", "/").split("/") if part]
    parts = parts[:-1]
    return "/".join(parts) if parts else UNGROUPED
