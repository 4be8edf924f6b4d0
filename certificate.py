import logging
import re
import tempfile
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Optional, Union
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from errors import RenderingFailure

logger = logging.getLogger(__name__)

NAVY = HexColor("#1E3A8A")
GOLD = HexColor("#8A6D00")
GREY = HexColor("#6B7280")
DARK = HexColor("#111827")


def make_styles():
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("CertTitle", parent=base["Title"],
                                fontSize=32, leading=40, textColor=NAVY,
                                alignment=TA_CENTER, fontName="Helvetica-Bold",
                                spaceAfter=10),
        "text": ParagraphStyle("CertText", parent=base["Normal"],
                               fontSize=15, leading=22, textColor=DARK,
                               alignment=TA_CENTER, fontName="Helvetica"),
        "name": ParagraphStyle("CertName", parent=base["Normal"],
                               fontSize=26, leading=34, textColor=GOLD,
                               alignment=TA_CENTER, fontName="Helvetica-BoldOblique",
                               spaceBefore=6, spaceAfter=6),
        "course": ParagraphStyle("CertCourse", parent=base["Normal"],
                                 fontSize=20, leading=28, textColor=NAVY,
                                 alignment=TA_CENTER, fontName="Helvetica-Bold",
                                 spaceBefore=4, spaceAfter=4),
        "footer": ParagraphStyle("CertFooter", parent=base["Normal"],
                                 fontSize=12, leading=16, textColor=GREY,
                                 alignment=TA_CENTER, fontName="Helvetica"),
    }


def render_certificate(learner_name: str, course_title: str, percentage: int,
                       academy_name: str, issued_on: Optional[datetime] = None) -> bytes:
    """Render a one-page certificate of completion and return the PDF bytes"""
    issued_on = issued_on or datetime.now()
    styles = make_styles()
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=25 * mm, rightMargin=25 * mm,
        topMargin=25 * mm, bottomMargin=20 * mm,
        title=f"Certificate of Completion - {course_title}",
        author=academy_name,
    )

    story = [
        Paragraph("Certificate of Completion", styles["title"]),
        HRFlowable(width="60%", thickness=1.5, color=GOLD, hAlign="CENTER",
                   spaceBefore=4, spaceAfter=18),
        Paragraph("This certifies that", styles["text"]),
        Paragraph(escape(learner_name), styles["name"]),
        Paragraph("has successfully completed the course", styles["text"]),
        Paragraph(escape(course_title), styles["course"]),
        Paragraph(f"with a score of {percentage}%", styles["text"]),
        Spacer(1, 24),
        HRFlowable(width="30%", thickness=0.75, color=GREY, hAlign="CENTER",
                   spaceAfter=8),
        Paragraph(escape(academy_name), styles["footer"]),
        Paragraph(f"Issued on {issued_on.strftime('%d %B %Y')}", styles["footer"]),
    ]
    doc.build(story)
    return buffer.getvalue()


CERTIFICATE_FILENAME = "certificate.pdf"


def course_slug(course_title: str) -> str:
    return re.sub(r'[^a-z0-9]+', '_', course_title.lower()).strip('_') or 'course'


class CertificateIssuer:
    def __init__(self, output_dir: Union[str, Path], academy_name: str):
        self.output_dir = Path(output_dir)
        self.academy_name = academy_name

    def issue(self, learner_name: str, course_title: str, percentage: int) -> Path:
        """Render a certificate and save it for download.

        Each call writes into its own fresh directory under `output_dir`, so
        concurrent sessions never share or overwrite a file.
        """
        issued_on = datetime.now()
        try:
            pdf = render_certificate(learner_name, course_title, percentage,
                                     self.academy_name, issued_on=issued_on)
            self.output_dir.mkdir(parents=True, exist_ok=True)
            issue_dir = Path(tempfile.mkdtemp(
                prefix=f"{course_slug(course_title)}_{issued_on.strftime('%Y%m%d_%H%M%S')}_",
                dir=self.output_dir,
            ))
            file_path = issue_dir / CERTIFICATE_FILENAME
            file_path.write_bytes(pdf)
        except Exception as e:
            logger.error(f"Error rendering certificate: {str(e)}", exc_info=True)
            raise RenderingFailure(f"Could not generate the certificate: {str(e)}") from e

        logger.info(f"Certificate issued for course '{course_title}': {file_path}")
        return file_path
