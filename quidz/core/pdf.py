"""
Small reportlab wrapper shared by the PDF exports (portfolio, flashcards, reports).
Text is laid out top-down on A4 with simple word wrapping and automatic page breaks.
"""
import io
from typing import List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def wrap_line(text: str, max_chars: int = 100) -> List[str]:
    text = (text or "").replace("\r", "")
    lines_out: List[str] = []
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            lines_out.append("")
            continue
        while len(line) > max_chars:
            cut = line.rfind(" ", 0, max_chars)
            if cut <= 0:
                cut = max_chars
            lines_out.append(line[:cut].strip())
            line = line[cut:].strip()
        lines_out.append(line)
    return lines_out


class PdfDocument:
    def __init__(self, title: str, subtitle: str = ""):
        self.buffer = io.BytesIO()
        self.c = canvas.Canvas(self.buffer, pagesize=A4)
        self.width, self.height = A4
        self.c.setTitle(title)

        self.c.setFillColorRGB(0.1, 0.12, 0.18)
        self.c.rect(0, self.height - 80, self.width, 80, fill=True, stroke=False)
        self.c.setFont("Helvetica-Bold", 16)
        self.c.setFillColor(colors.white)
        self.c.drawString(40, self.height - 45, title)
        if subtitle:
            self.c.setFont("Helvetica", 10)
            self.c.drawString(40, self.height - 65, subtitle)
        self.c.setFillColor(colors.black)
        self.y = self.height - 110

    def new_page(self):
        self.c.showPage()
        self.y = self.height - 60

    def section(self, title: str, lines: List[str], small: bool = False):
        step = 10 if small else 12
        if self.y < 80:
            self.new_page()
        self.c.setFont("Helvetica-Bold", 13)
        self.c.drawString(40, self.y, title)
        self.y -= 18
        self.c.setFont("Helvetica", 9 if small else 10)
        for line in lines:
            for chunk in wrap_line(line, max_chars=100):
                if chunk:
                    self.c.drawString(40, self.y, chunk)
                self.y -= step
                if self.y < 60:
                    self.new_page()
                    self.c.setFont("Helvetica", 9 if small else 10)
        self.y -= 8

    def render(self) -> bytes:
        self.c.save()
        return self.buffer.getvalue()
