"""Full extraction pipeline orchestrating OCR, field extraction and reporting."""

import os
import time
from typing import Optional, Dict, Any, Sequence, Union
from pathlib import Path

from hemascan.extractors import PositionalExtractor
from hemascan.ocr import OCRResult, OCRError, create_ocr_client
from hemascan.ocr.result import validate_image_path, SUPPORTED_IMAGE_EXTENSIONS
from hemascan.report import render_pdf_report, DEFAULT_REPORT_NAME
from hemascan.schema import FieldSchema, ResultMap, HEMATOLOGY_FIELDS
from hemascan.utils import setup_logger


class ExtractionResult:
    """Result of the extraction pipeline."""

    def __init__(
        self,
        fields: ResultMap,
        ocr_result: OCRResult,
        processing_time: float
    ):
        """
        Initialize extraction result.

        Args:
            fields: Extracted value for every schema field
            ocr_result: OCR result the values were extracted from
            processing_time: Total processing time in seconds
        """
        self.fields = fields
        self.ocr_result = ocr_result
        self.processing_time = processing_time

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'extracted_data': self.fields.to_dict(),
            'metadata': {
                'ocr_provider': self.ocr_result.provider,
                'confidence_scores': self.ocr_result.confidence_scores,
                'processing_time_seconds': self.processing_time,
                'ocr_text_length': len(self.ocr_result.full_text),
                'ocr_line_count': len(self.ocr_result.lines),
                'filled_fields': len(self.fields.filled_fields()),
                'total_fields': len(self.fields)
            }
        }


class HematologyPipeline:
    """Image → OCR → positional field extraction → PDF report."""

    def __init__(
        self,
        ocr_client: Optional[Any] = None,
        schema: Optional[Union[FieldSchema, Sequence[str]]] = None,
        ocr_provider: Optional[str] = None,
        credentials_path: Optional[str] = None,
        ocr_space_api_key: Optional[str] = None,
        output_dir: Optional[str] = None
    ):
        """
        Initialize extraction pipeline.

        Args:
            ocr_client: Object with extract_text / extract_text_from_bytes. If None,
                        one is created from ocr_provider.
            schema: Fields to extract (default: HEMATOLOGY_FIELDS)
            ocr_provider: 'vision' or 'ocrspace'. If None, uses HEMASCAN_OCR_PROVIDER.
            credentials_path: Google Cloud service account file (vision only)
            ocr_space_api_key: OCR.space API key (ocrspace only)
            output_dir: Directory for reports and raw OCR dumps.
                        If None, uses HEMASCAN_OUTPUT_DIR (default 'output').
        """
        if ocr_client is None:
            ocr_client = create_ocr_client(
                provider=ocr_provider,
                credentials_path=credentials_path,
                ocr_space_api_key=ocr_space_api_key
            )
        self.ocr_client = ocr_client

        self.extractor = PositionalExtractor(schema if schema is not None else HEMATOLOGY_FIELDS)
        self.output_dir = Path(output_dir or os.getenv("HEMASCAN_OUTPUT_DIR", "output"))

    @property
    def schema(self) -> FieldSchema:
        return self.extractor.schema

    def extract(
        self,
        image_path: str,
        save_raw_ocr: bool = False
    ) -> ExtractionResult:
        """
        Run the full extraction pipeline on an image file.

        Args:
            image_path: Path to image file (PNG or JPG)
            save_raw_ocr: Whether to save raw OCR output

        Returns:
            ExtractionResult with extracted fields and metadata

        Raises:
            FileNotFoundError: If the image does not exist
            ValueError: If the image is not PNG or JPG
            OCRError: If OCR fails or finds no text
        """
        start_time = time.time()

        logger = setup_logger()
        logger.info("=" * 60)
        logger.info(f"EXTRACTION PIPELINE: {Path(image_path).name}")
        logger.info("=" * 60)

        # Step 1: Validate image
        validate_image_path(image_path)

        # Step 2: OCR
        logger.info("Step 1: Performing OCR...")
        ocr_result = self.ocr_client.extract_text(
            image_path=image_path,
            save_raw_output=save_raw_ocr,
            output_dir=str(self.output_dir)
        )

        return self._extract_fields(ocr_result, start_time)

    def extract_from_bytes(
        self,
        image_bytes: bytes,
        image_format: str = "PNG",
        source: str = "library"
    ) -> ExtractionResult:
        """
        Extract from image bytes (for use with uploaded files or camera captures).

        Args:
            image_bytes: Image file bytes
            image_format: Image format (PNG, JPG or JPEG)
            source: 'camera' for photos just taken, 'library' for picked files;
                    selects the resize box applied before OCR

        Returns:
            ExtractionResult with extracted fields and metadata

        Raises:
            ValueError: If the image format is not PNG or JPG
            OCRError: If OCR fails or finds no text
        """
        start_time = time.time()

        image_ext = f".{image_format.lower()}"
        if image_ext not in SUPPORTED_IMAGE_EXTENSIONS:
            raise ValueError(f"Unsupported image format: {image_ext}. Use PNG or JPG.")

        logger = setup_logger()
        logger.info("=" * 60)
        logger.info(f"EXTRACTION PIPELINE: (from {image_format.upper()} bytes, {source})")
        logger.info("=" * 60)

        logger.info("Step 1: Performing OCR...")
        ocr_result = self.ocr_client.extract_text_from_bytes(image_bytes, source=source)

        return self._extract_fields(ocr_result, start_time)

    def _extract_fields(self, ocr_result: OCRResult, start_time: float) -> ExtractionResult:
        logger = setup_logger()

        lines = ocr_result.lines
        if not lines:
            raise OCRError(f"OCR returned no text ({ocr_result.provider})")

        # Step 3: Positional field extraction
        logger.info(f"Step 2: Positional extraction over {len(lines)} line(s)...")
        fields = self.extractor.extract(lines)

        processing_time = time.time() - start_time

        logger.info("=" * 60)
        logger.info("EXTRACTION COMPLETE")
        logger.info("=" * 60)
        logger.info(f"Processing time: {processing_time:.2f}s")
        logger.info(f"Fields filled: {len(fields.filled_fields())}/{len(fields)}")
        logger.info("=" * 60)

        return ExtractionResult(
            fields=fields,
            ocr_result=ocr_result,
            processing_time=processing_time
        )

    def generate_report(
        self,
        result: ExtractionResult,
        destination: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Render the extracted fields as a PDF report.

        Args:
            result: Pipeline result
            destination: Output path (default: <output_dir>/output.pdf)

        Returns:
            Path of the written PDF
        """
        path = Path(destination) if destination is not None else self.output_dir / DEFAULT_REPORT_NAME
        render_pdf_report(result.fields, destination=path)
        return path
