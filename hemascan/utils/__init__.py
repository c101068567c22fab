"""Utility modules for logging and debugging."""

from .logger import (
    setup_logger,
    get_logger,
    log_ocr_result,
    log_token_stream,
    log_field_assignment,
    log_discarded_token,
    redact_sensitive_data,
)

__all__ = [
    'setup_logger',
    'get_logger',
    'log_ocr_result',
    'log_token_stream',
    'log_field_assignment',
    'log_discarded_token',
    'redact_sensitive_data',
]
