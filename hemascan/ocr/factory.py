"""OCR client factory."""

import os
from typing import Optional, Union

from hemascan.ocr.ocr_space_client import OCRSpaceClient
from hemascan.ocr.vision_client import VisionOCRClient


def create_ocr_client(
    provider: Optional[str] = None,
    credentials_path: Optional[str] = None,
    ocr_space_api_key: Optional[str] = None
) -> Union[VisionOCRClient, OCRSpaceClient]:
    """
    Return the OCR client for `provider`.

    Args:
        provider: 'vision' or 'ocrspace'. If None, uses HEMASCAN_OCR_PROVIDER (default 'vision').
        credentials_path: Google Cloud service account file (vision only)
        ocr_space_api_key: OCR.space API key (ocrspace only)

    Raises:
        ValueError: If provider is unknown
    """
    provider = (provider or os.getenv("HEMASCAN_OCR_PROVIDER", "vision")).lower()

    if provider == "vision":
        return VisionOCRClient(credentials_path=credentials_path)
    elif provider == "ocrspace":
        return OCRSpaceClient(api_key=ocr_space_api_key)
    else:
        raise ValueError(f"Unsupported OCR provider: {provider}. Use 'vision' or 'ocrspace'.")
