"""Logging utilities for OCR and field extraction debugging."""

import os
import re
import logging
from typing import Optional, Any, List

# Global debug mode flag
DEBUG_MODE = os.getenv("HEMASCAN_DEBUG", "false").lower() == "true"

# Logger instance
_logger: Optional[logging.Logger] = None


def setup_logger(level: int = logging.INFO, debug_mode: bool = None) -> logging.Logger:
    """
    Set up logger for the extraction pipeline.

    Args:
        level: Logging level (default: INFO)
        debug_mode: Override debug mode (default: from env var)

    Returns:
        Configured logger instance
    """
    global _logger, DEBUG_MODE

    if debug_mode is not None:
        DEBUG_MODE = debug_mode

    if _logger is None:
        _logger = logging.getLogger("hemascan")

        handler = logging.StreamHandler()
        _logger.addHandler(handler)

        # Prevent duplicate logs
        _logger.propagate = False

    effective_level = logging.DEBUG if DEBUG_MODE else level
    _logger.setLevel(effective_level)
    for handler in _logger.handlers:
        handler.setLevel(effective_level)
        if DEBUG_MODE:
            handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
        else:
            handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))

    return _logger


def get_logger() -> logging.Logger:
    """Get the global logger instance."""
    if _logger is None:
        return setup_logger()
    return _logger


def log_ocr_result(logger: logging.Logger, ocr_result: Any, debug: bool = False):
    """
    Log OCR extraction results.

    Args:
        logger: Logger instance
        ocr_result: OCRResult object
        debug: If True, log full text
    """
    logger.info("=" * 60)
    logger.info(f"OCR EXTRACTION COMPLETE ({ocr_result.provider})")
    logger.info("=" * 60)
    logger.info(f"Text length: {len(ocr_result.full_text)} characters")
    logger.info(f"Lines detected: {len(ocr_result.lines)}")

    word_level = (ocr_result.confidence_scores or {}).get('word_level', {})
    if word_level:
        logger.info(f"Word-level confidence: mean={word_level.get('mean', 0):.3f}, "
                    f"min={word_level.get('min', 0):.3f}, max={word_level.get('max', 0):.3f}")

    if ocr_result.warnings:
        logger.warning(f"OCR warnings: {ocr_result.warnings}")

    if debug and DEBUG_MODE:
        logger.debug("=" * 60)
        logger.debug("RAW OCR TEXT:")
        logger.debug("=" * 60)
        logger.debug(ocr_result.full_text[:2000])  # First 2000 chars
        if len(ocr_result.full_text) > 2000:
            logger.debug(f"... (truncated, total length: {len(ocr_result.full_text)})")


def log_token_stream(logger: logging.Logger, normalized_text: str, tokens: List[str]):
    """
    Log the normalized text and the tokens split from it.

    Args:
        logger: Logger instance
        normalized_text: Whitespace-collapsed OCR text
        tokens: Tokens in reading order
    """
    if not DEBUG_MODE:
        return

    logger.debug(f"Normalized text: {normalized_text[:2000]}")
    logger.debug(f"Tokens ({len(tokens)}):")
    for i, token in enumerate(tokens[:200]):
        logger.debug(f"  {i:3d}. {token!r}")


def log_field_assignment(logger: logging.Logger, field_name: str, value: str, label: Optional[str] = None):
    """
    Log the value assigned to a field. Empty fields are logged at debug level;
    the extractor reports the filled count once per pass.

    Args:
        logger: Logger instance
        field_name: Name of the field
        value: Extracted value (empty string when none was found)
        label: Last label text seen before the value, if any
    """
    if value:
        suffix = f" (label: {label!r})" if label else ""
        logger.info(f"  ✓ {field_name:15s}: {value}{suffix}")
    else:
        logger.debug(f"  ✗ {field_name:15s}: <empty>")


def log_discarded_token(logger: logging.Logger, token: str, reason: str):
    """Log a token that was dropped during classification."""
    if not DEBUG_MODE:
        return

    logger.debug(f"  Discarded {token!r}: {reason}")


def redact_sensitive_data(text: str, redact_api_keys: bool = True) -> str:
    """
    Redact sensitive data from logs.

    Args:
        text: Text to redact
        redact_api_keys: Whether to redact API keys

    Returns:
        Redacted text
    """
    if not redact_api_keys:
        return text

    # OCR.space keys (K + 14 digits)
    text = re.sub(r'\bK\d{14}\b', 'KREDACTED', text)

    # Google API keys
    text = re.sub(r'AIza[0-9A-Za-z_-]{35}', 'AIzaREDACTED', text)

    return text
