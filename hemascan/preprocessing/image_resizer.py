"""Resize and compress report photos before sending them to OCR."""

import base64
import io
from typing import Dict, Tuple

from PIL import Image


# Target box per image source. Images are stretched to fit exactly.
TARGET_SIZES: Dict[str, Tuple[int, int]] = {
    'camera': (800, 1000),
    'library': (1000, 1000),
}

JPEG_QUALITY = 70


class PreparedImage:
    """JPEG-encoded image ready for upload to an OCR provider."""

    def __init__(self, content: bytes, size: Tuple[int, int]):
        self.content = content
        self.size = size

    @property
    def data_uri(self) -> str:
        """Base64 data URI, as accepted by OCR.space `base64Image`."""
        encoded = base64.b64encode(self.content).decode('ascii')
        return f"data:image/jpeg;base64,{encoded}"

    def __repr__(self) -> str:
        return f"PreparedImage(size={self.size}, bytes={len(self.content)})"


def prepare_image(image_bytes: bytes, source: str = 'library') -> PreparedImage:
    """
    Resize an image to the fixed box for its source and re-encode as JPEG.

    Args:
        image_bytes: Raw image file bytes (PNG or JPG)
        source: 'camera' for photos just taken, 'library' for picked files

    Returns:
        PreparedImage with JPEG bytes at the target size

    Raises:
        ValueError: If source is unknown
    """
    if source not in TARGET_SIZES:
        raise ValueError(f"Unknown image source: {source}. Use one of: {', '.join(TARGET_SIZES)}")

    target_size = TARGET_SIZES[source]

    with Image.open(io.BytesIO(image_bytes)) as image:
        resized = image.convert('RGB').resize(target_size)

    buffer = io.BytesIO()
    resized.save(buffer, format='JPEG', quality=JPEG_QUALITY)

    return PreparedImage(content=buffer.getvalue(), size=target_size)
