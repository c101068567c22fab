"""Hematology report scanning: OCR text to positional lab value extraction."""

__version__ = "0.1.0"
