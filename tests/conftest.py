"""Pytest configuration and fixtures."""

import io

import pytest
from PIL import Image

from hemascan.ocr import OCRResult
from hemascan.pipeline import HematologyPipeline
from hemascan.schema import HEMATOLOGY_FIELDS


class FakeOCRClient:
    """Stands in for a cloud OCR client; returns canned text."""

    provider = 'fake'

    def __init__(self, full_text: str):
        self.full_text = full_text
        self.calls = []

    def _result(self) -> OCRResult:
        return OCRResult(full_text=self.full_text, provider=self.provider)

    def extract_text(self, image_path, save_raw_output=False, output_dir=None):
        self.calls.append(('path', image_path))
        return self._result()

    def extract_text_from_bytes(self, image_bytes, **kwargs):
        self.calls.append(('bytes', len(image_bytes), kwargs.get('source')))
        return self._result()


@pytest.fixture
def hematology_schema():
    return HEMATOLOGY_FIELDS


@pytest.fixture
def cbc_ocr_text():
    """OCR text of a short report, with labels split and wrapped across lines."""
    return (
        "Hct 42.5\n"
        "  RBCs   4.8\n"
        "Pit\n"
        "250\n"
        "WBCs 7.2 Neutrophils\n"
        "60\n"
        "   \n"
        "Segs 55 Bands 5"
    )


@pytest.fixture
def expected_cbc_values():
    """Expected extraction for cbc_ocr_text against HEMATOLOGY_FIELDS."""
    return {
        "Hct": "42.5",
        "RBCs": "4.8",
        "Pit": "250",
        "WBCs": "7.2",
        "Neutrophils": "60",
        "Segs": "55",
        "Bands": "5",
    }


@pytest.fixture
def fake_ocr_client(cbc_ocr_text):
    return FakeOCRClient(cbc_ocr_text)


@pytest.fixture
def pipeline(fake_ocr_client, tmp_path):
    """Pipeline wired to the fake OCR client, writing into a temp directory."""
    return HematologyPipeline(ocr_client=fake_ocr_client, output_dir=str(tmp_path))


@pytest.fixture
def png_bytes():
    """A small white PNG image."""
    buffer = io.BytesIO()
    Image.new('RGB', (120, 80), color='white').save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def png_path(tmp_path, png_bytes):
    path = tmp_path / "report.png"
    path.write_bytes(png_bytes)
    return str(path)


@pytest.fixture
def make_ocr_client():
    """Factory for fake OCR clients returning the given text."""
    return FakeOCRClient
