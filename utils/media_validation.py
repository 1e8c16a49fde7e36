"""Validation helpers for uploaded image content."""

import base64
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError


def sniff_image_path(path: Union[str, Path]) -> Optional[str]:
    """Return the image MIME type of a file on disk, or None for non-images.

    Detection reads the header only; the pixels are not decoded.
    """
    try:
        with Image.open(path) as img:
            image_format = img.format
    except (UnidentifiedImageError, OSError, ValueError):
        return None
    if not image_format:
        return None
    return Image.MIME.get(image_format.upper(), f"image/{image_format.lower()}")


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a `data:<mime>;base64,...` string for a JSON body."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
