"""Preview generator service.

Provides a small OOP wrapper around Pillow to create previews from raw
image bytes. The preview fits within 160x160 pixels and is returned as
a PNG data URL that a table cell or terminal link can render directly.

Public class: `ThumbnailGenerator`

Example:
    tg = ThumbnailGenerator(max_size=(160, 160))
    preview = tg.create_preview(image_bytes)
"""
from __future__ import annotations

import io
from typing import Tuple

from PIL import Image

from utils.media_validation import to_data_uri


class ThumbnailGenerator:
    """Generate previews from image bytes.

    Args:
        max_size: Maximum width and height for the preview. Defaults to (160, 160).
        background: Optional background color used when flattening images with alpha.
            If None, images with alpha are flattened against white.
    """

    def __init__(self, max_size: Tuple[int, int] = (160, 160), background: Tuple[int, int, int] | None = None):
        self.max_size = max_size
        self.background = background or (255, 255, 255)

    def create_preview(self, data: bytes) -> str:
        """Create a PNG data URL preview from raw image bytes.

        Args:
            data: Raw image file content.

        Returns:
            A `data:image/png;base64,...` string.

        Raises:
            ValueError: If the bytes cannot be opened as an image.
        """
        try:
            src = Image.open(io.BytesIO(data))
            src.load()
        except Exception as exc:
            raise ValueError("Bytes are not a supported image format") from exc

        src = src.convert("RGBA")
        src.thumbnail(self.max_size, Image.LANCZOS)

        # Flatten alpha against the background color
        background = Image.new("RGB", src.size, self.background)
        background.paste(src, mask=src.split()[3])

        out_io = io.BytesIO()
        background.save(out_io, format="PNG", optimize=True)
        return to_data_uri(out_io.getvalue(), "image/png")
