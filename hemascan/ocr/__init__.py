"""OCR module for extracting text lines from report images."""

from .result import OCRResult, OCRError
from .vision_client import VisionOCRClient
from .ocr_space_client import OCRSpaceClient
from .factory import create_ocr_client

__all__ = ['OCRResult', 'OCRError', 'VisionOCRClient', 'OCRSpaceClient', 'create_ocr_client']
