"""OCR result container shared by all OCR providers."""

import json
from pathlib import Path
from typing import Dict, List, Optional, Any

from hemascan.utils import get_logger


SUPPORTED_IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg')


class OCRError(Exception):
    """Raised when an OCR provider fails or returns no usable text."""


class OCRResult:
    """Container for OCR extraction results."""

    def __init__(
        self,
        full_text: str,
        provider: str,
        word_annotations: Optional[List[Dict[str, Any]]] = None,
        confidence_scores: Optional[Dict[str, Any]] = None,
        raw_response: Optional[Dict[str, Any]] = None,
        warnings: Optional[List[str]] = None
    ):
        """
        Initialize OCR result.

        Args:
            full_text: Complete extracted text, lines separated by newlines
            provider: Name of the OCR provider that produced the text
            word_annotations: Word-level annotations with bounding boxes (if the provider has them)
            confidence_scores: Aggregate confidence statistics
            raw_response: Raw API response for debugging
            warnings: Warnings reported by the provider
        """
        self.full_text = full_text
        self.provider = provider
        self.word_annotations = word_annotations or []
        self.confidence_scores = confidence_scores or {}
        self.raw_response = raw_response or {}
        self.warnings = warnings or []

    @property
    def lines(self) -> List[str]:
        """Trimmed, non-empty text lines in reading order."""
        stripped = (line.strip() for line in self.full_text.split('\n'))
        return [line for line in stripped if line]

    def to_dict(self) -> Dict[str, Any]:
        """Convert OCR result to dictionary."""
        return {
            'provider': self.provider,
            'full_text': self.full_text,
            'lines': self.lines,
            'word_annotations': self.word_annotations,
            'confidence_scores': self.confidence_scores,
            'warnings': self.warnings,
            'raw_response': self.raw_response
        }

    def __repr__(self) -> str:
        return f"OCRResult(provider={self.provider!r}, full_text_length={len(self.full_text)}, lines={len(self.lines)})"


def validate_image_path(image_path: str) -> Path:
    """Check that `image_path` exists and is a PNG or JPG file."""
    path = Path(image_path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")

    image_ext = path.suffix.lower()
    if image_ext not in SUPPORTED_IMAGE_EXTENSIONS:
        raise ValueError(f"Unsupported image format: {image_ext}. Use PNG or JPG.")

    return path


def write_raw_output(
    image_name: str,
    raw_response: Dict[str, Any],
    output_dir: Optional[str] = None
) -> Path:
    """Save raw OCR output to `<output_dir>/<image_name>_ocr_raw.json`."""
    if output_dir is None:
        output_dir = 'output'

    Path(output_dir).mkdir(parents=True, exist_ok=True)
    output_path = Path(output_dir) / f"{image_name}_ocr_raw.json"

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(raw_response, f, indent=2, ensure_ascii=False)

    get_logger().info(f"Raw OCR output saved to: {output_path}")
    return output_path
