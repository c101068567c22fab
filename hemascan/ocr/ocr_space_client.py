"""OCR.space API client for OCR text extraction."""

import os
from typing import Dict, Optional, Any

import requests

from hemascan.ocr.result import OCRResult, OCRError, validate_image_path, write_raw_output
from hemascan.preprocessing import prepare_image
from hemascan.utils import get_logger, log_ocr_result, redact_sensitive_data


OCR_SPACE_URL = "https://api.ocr.space/parse/image"


class OCRSpaceClient:
    """Client for the OCR.space parse/image endpoint."""

    provider = 'ocrspace'

    def __init__(
        self,
        api_key: Optional[str] = None,
        language: str = "eng",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize OCR.space client.

        Args:
            api_key: OCR.space API key. If None, uses OCR_SPACE_API_KEY env var.
            language: OCR language code
            timeout: HTTP timeout in seconds
            session: Optional requests session (new one created if None)

        Raises:
            ValueError: If API key is not provided
        """
        self.api_key = api_key or os.getenv("OCR_SPACE_API_KEY")
        if not self.api_key:
            raise ValueError("OCR.space API key not provided. Set OCR_SPACE_API_KEY env var or pass api_key parameter.")

        self.language = language
        self.timeout = timeout
        self.session = session or requests.Session()

    def extract_text(
        self,
        image_path: str,
        save_raw_output: bool = False,
        output_dir: Optional[str] = None,
        source: str = 'library'
    ) -> OCRResult:
        """
        Extract text from an image file.

        Args:
            image_path: Path to image file (PNG or JPG)
            save_raw_output: Whether to save raw OCR output to file
            output_dir: Directory to save raw output
            source: Image source, selects the resize box ('camera' or 'library')

        Returns:
            OCRResult object containing extracted text
        """
        path = validate_image_path(image_path)

        with open(path, 'rb') as image_file:
            content = image_file.read()

        return self.extract_text_from_bytes(
            content,
            image_name=path.stem,
            save_raw_output=save_raw_output,
            output_dir=output_dir,
            source=source
        )

    def extract_text_from_bytes(
        self,
        image_bytes: bytes,
        image_name: str = 'upload',
        save_raw_output: bool = False,
        output_dir: Optional[str] = None,
        source: str = 'library'
    ) -> OCRResult:
        """
        Resize the image, post it to OCR.space and parse the response.

        Raises:
            OCRError: If the request fails or OCR.space reports a failure
        """
        prepared = prepare_image(image_bytes, source=source)

        form = {
            'base64Image': prepared.data_uri,
            'language': self.language,
            'isOverlayRequired': 'false',
            'isTable': 'true',
            'scale': 'true',
        }

        try:
            response = self.session.post(
                OCR_SPACE_URL,
                headers={'apikey': self.api_key},
                data=form,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise OCRError(redact_sensitive_data(f"OCR.space request failed: {e}")) from e
        except ValueError as e:
            raise OCRError(f"OCR.space returned invalid JSON: {e}") from e

        full_text = self._parse_response(data)

        if save_raw_output:
            write_raw_output(image_name, data, output_dir)

        ocr_result = OCRResult(
            full_text=full_text,
            provider=self.provider,
            raw_response=data,
            warnings=self._collect_warnings(data)
        )
        log_ocr_result(get_logger(), ocr_result, debug=True)
        return ocr_result

    def _parse_response(self, data: Dict[str, Any]) -> str:
        """Return ParsedText of the first result, or raise OCRError."""
        if data.get('OCRExitCode') != 1:
            raise OCRError(f"OCR.space error: {self._error_message(data)}")

        parsed_results = data.get('ParsedResults') or []
        if not parsed_results:
            raise OCRError("OCR.space returned no parsed results")

        return parsed_results[0].get('ParsedText') or ""

    def _error_message(self, data: Dict[str, Any]) -> str:
        message = data.get('ErrorMessage')
        if isinstance(message, list):
            message = '; '.join(str(m) for m in message)
        return message or f"exit code {data.get('OCRExitCode')}"

    def _collect_warnings(self, data: Dict[str, Any]) -> list:
        # Non-fatal page errors are reported per result
        warnings = []
        for result in data.get('ParsedResults') or []:
            details = result.get('ErrorMessage')
            if details:
                warnings.append(str(details))
        return warnings
