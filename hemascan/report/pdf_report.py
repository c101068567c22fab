"""PDF rendering of extracted hematology values."""

import io
from pathlib import Path
from typing import List, Optional, Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from hemascan.schema import ResultMap
from hemascan.utils import get_logger


REPORT_TITLE = "Hematology"
TABLE_HEADER = ["Field", "Result"]
DEFAULT_REPORT_NAME = "output.pdf"


def build_table_rows(result_map: ResultMap) -> List[List[str]]:
    """Header row followed by one [field, value] row per schema field, in schema order."""
    return [list(TABLE_HEADER)] + [[field, value] for field, value in result_map.rows()]


def render_pdf_report(
    result_map: ResultMap,
    destination: Optional[Union[str, Path]] = None,
    title: str = REPORT_TITLE
) -> bytes:
    """
    Render a titled Field/Result table as PDF.

    Args:
        result_map: Extracted values
        destination: Optional file path; parent directories are created
        title: Heading drawn above the table

    Returns:
        PDF document bytes
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=title)
    styles = getSampleStyleSheet()

    table = Table(build_table_rows(result_map), colWidths=[200, 200], repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#2980b9')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f5f5f5')]),
    ]))

    doc.build([Paragraph(title, styles['Title']), Spacer(1, 12), table])
    pdf_bytes = buffer.getvalue()

    if destination is not None:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(pdf_bytes)
        get_logger().info(f"PDF saved to: {path}")

    return pdf_bytes
