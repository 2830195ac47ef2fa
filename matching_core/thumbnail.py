from __future__ import annotations

import base64
import io
import os

from PIL import Image, ImageOps, UnidentifiedImageError

THUMB_SIZE = int(os.getenv("MATCHING_THUMB_SIZE", "250"))

SUPPORTED_EXTENSIONS = ('.png', '.gif')

_MIME_BY_FORMAT = {
    'PNG': 'image/png',
    'GIF': 'image/gif',
}

RESAMPLE = Image.Resampling.LANCZOS


class ThumbnailError(Exception):
    """Raised when dropped bytes cannot be turned into a thumbnail."""


def is_supported_filename(name: str) -> bool:
    return name.lower().endswith(SUPPORTED_EXTENSIONS)


def make_thumbnail(data: bytes, bound: int = THUMB_SIZE) -> str:
    """Decodes a PNG or GIF, fits it inside bound x bound and returns it as a data URI."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ThumbnailError(f"cannot decode image: {e}") from e
    fmt = img.format
    mime = _MIME_BY_FORMAT.get(fmt or '')
    if mime is None:
        raise ThumbnailError(f"unsupported image format: {fmt}")
    buf = io.BytesIO()
    try:
        resized = ImageOps.contain(img, (bound, bound), method=RESAMPLE)
        if fmt == 'GIF' and resized.mode not in ('P', 'L'):
            resized = resized.convert('P', palette=Image.Palette.ADAPTIVE)
        resized.save(buf, format=fmt)
    except (OSError, ValueError) as e:
        raise ThumbnailError(f"cannot encode {fmt}: {e}") from e
    encoded = base64.b64encode(buf.getvalue()).decode('ascii')
    return f"data:{mime};base64,{encoded}"
