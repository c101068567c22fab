"""Google Cloud Vision API client for OCR text extraction."""

import os
from typing import Dict, List, Optional, Any

from google.cloud import vision
from google.cloud.vision_v1 import types
from google.protobuf.json_format import MessageToDict

from hemascan.ocr.result import OCRResult, OCRError, validate_image_path, write_raw_output
from hemascan.preprocessing import prepare_image
from hemascan.utils import get_logger, log_ocr_result


class VisionOCRClient:
    """Client for Google Cloud Vision API OCR operations."""

    provider = 'vision'

    def __init__(self, credentials_path: Optional[str] = None):
        """
        Initialize Vision OCR client.

        Args:
            credentials_path: Path to Google Cloud service account JSON file.
                            If None, uses GOOGLE_APPLICATION_CREDENTIALS env var.
        """
        if credentials_path:
            os.environ['GOOGLE_APPLICATION_CREDENTIALS'] = credentials_path

        self.client = vision.ImageAnnotatorClient()

    def extract_text(
        self,
        image_path: str,
        save_raw_output: bool = False,
        output_dir: Optional[str] = None
    ) -> OCRResult:
        """
        Extract text from an image file using DOCUMENT_TEXT_DETECTION.

        Args:
            image_path: Path to image file (PNG or JPG)
            save_raw_output: Whether to save raw OCR output to file
            output_dir: Directory to save raw output (defaults to 'output' directory)

        Returns:
            OCRResult object containing extracted text and metadata
        """
        path = validate_image_path(image_path)

        with open(path, 'rb') as image_file:
            content = image_file.read()

        return self.extract_text_from_bytes(
            content,
            image_name=path.stem,
            save_raw_output=save_raw_output,
            output_dir=output_dir
        )

    def extract_text_from_bytes(
        self,
        image_bytes: bytes,
        image_name: str = 'upload',
        save_raw_output: bool = False,
        output_dir: Optional[str] = None,
        source: Optional[str] = None
    ) -> OCRResult:
        """
        Extract text from raw image bytes.

        Args:
            image_bytes: Raw image file bytes
            image_name: Stem used for the raw output file
            save_raw_output: Whether to save raw OCR output to file
            output_dir: Directory to save raw output
            source: If given ('camera' or 'library'), resize to that box before upload

        Raises:
            OCRError: If the API reports an error
        """
        if source is not None:
            image_bytes = prepare_image(image_bytes, source=source).content

        image = vision.Image(content=image_bytes)
        response = self.client.document_text_detection(image=image)

        if response.error.message:
            raise OCRError(f"Vision API error: {response.error.message}")

        full_text_annotation = response.full_text_annotation
        full_text = full_text_annotation.text if full_text_annotation else ""

        word_annotations = self._extract_word_annotations(full_text_annotation)
        confidence_scores = self._calculate_confidence_scores(word_annotations)
        raw_response = self._serialize_response(response)

        if save_raw_output:
            write_raw_output(image_name, raw_response, output_dir)

        ocr_result = OCRResult(
            full_text=full_text,
            provider=self.provider,
            word_annotations=word_annotations,
            confidence_scores=confidence_scores,
            raw_response=raw_response,
        )
        log_ocr_result(get_logger(), ocr_result, debug=True)
        return ocr_result

    def _extract_word_annotations(
        self, full_text_annotation: types.TextAnnotation
    ) -> List[Dict[str, Any]]:
        """Extract word-level annotations with bounding boxes and confidence."""
        word_annotations = []

        if not full_text_annotation or not full_text_annotation.pages:
            return word_annotations

        for page in full_text_annotation.pages:
            for block in page.blocks:
                for paragraph in block.paragraphs:
                    for word in paragraph.words:
                        word_text = ''.join([
                            symbol.text for symbol in word.symbols
                        ])

                        vertices = [
                            {'x': vertex.x, 'y': vertex.y}
                            for vertex in word.bounding_box.vertices
                        ]

                        word_annotations.append({
                            'text': word_text,
                            'bounding_box': vertices,
                            'confidence': word.confidence
                        })

        return word_annotations

    def _calculate_confidence_scores(
        self,
        word_annotations: List[Dict[str, Any]]
    ) -> Dict[str, Dict[str, float]]:
        """Calculate aggregate word-level confidence."""
        word_confidences = [
            w['confidence'] for w in word_annotations
            if w['confidence'] is not None
        ]
        if not word_confidences:
            return {}

        return {
            'word_level': {
                'mean': sum(word_confidences) / len(word_confidences),
                'min': min(word_confidences),
                'max': max(word_confidences)
            }
        }

    def _serialize_response(self, response) -> Dict[str, Any]:
        """Serialize API response to dictionary for debugging."""
        return MessageToDict(response._pb)
