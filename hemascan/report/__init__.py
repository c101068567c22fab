"""Report rendering for extracted values."""

from .pdf_report import render_pdf_report, build_table_rows, DEFAULT_REPORT_NAME

__all__ = ['render_pdf_report', 'build_table_rows', 'DEFAULT_REPORT_NAME']
