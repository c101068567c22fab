"""Image preparation before OCR."""

from .image_resizer import prepare_image, PreparedImage, TARGET_SIZES

__all__ = ['prepare_image', 'PreparedImage', 'TARGET_SIZES']
