from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
from typing import Callable

from attest.assembler import (
    AttorneyBlock,
    Block,
    CaseCaption,
    ClosingCertification,
    CourtHeader,
    DateLocationBlock,
    DocumentTree,
    ExhibitList,
    NotaryBlock,
    OpeningStatement,
    ParagraphBlock,
    SignatureLine,
    Title,
)
from attest.rendering.base import RenderedDocument, rendered

MARGIN = 72.0
FIRST_LINE_INDENT = 36.0
SIGNATURE_RULE = "_" * 33
FURNITURE_FONT_SIZE = 10.0

Splitter = Callable[[str, str, float, float], list[str]]


@dataclass(frozen=True)
class _Line:
    text: str
    font: str
    size: float
    leading: float
    align: str = "left"
    indent: float = 0.0
    right_text: str = ""


@dataclass
class _Group:
    lines: list[_Line] = field(default_factory=list)
    keep_together: bool = False
    space_before: float = 0.0


class PdfRenderer:
    """Letter-size PDF with 1in margins, running header and "Page X of Y" footer."""

    renderer_id = "pdf"
    content_type = "application/pdf"
    extension = "pdf"

    def __init__(self, *, font_name: str = "Times-Roman", bold_font_name: str = "Times-Bold", font_size: float = 12.0) -> None:
        self.font_name = font_name
        self.bold_font_name = bold_font_name
        self.font_size = font_size

    def render(self, tree: DocumentTree) -> RenderedDocument:
        try:
            from reportlab.lib.pagesizes import letter
            from reportlab.lib.utils import simpleSplit
            from reportlab.pdfgen import canvas
        except ImportError as exc:
            raise RuntimeError("reportlab is required for PDF rendering") from exc

        page_width, page_height = letter
        groups = [self._group(block, page_width - 2 * MARGIN, simpleSplit) for block in tree.blocks]
        pages = self._paginate(groups, page_height - 2 * MARGIN)

        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=letter)
        pdf.setTitle(tree.running_header)
        for number, page in enumerate(pages, start=1):
            self._draw_furniture(pdf, tree.running_header, number, len(pages), page_width, page_height)
            cursor = page_height - MARGIN
            for gap, line in page:
                cursor -= gap
                baseline = cursor - line.size
                cursor -= line.leading
                self._draw_line(pdf, line, baseline, page_width)
            pdf.showPage()
        pdf.save()
        return rendered(self, tree, buffer.getvalue())

    def _draw_furniture(self, pdf, running_header: str, number: int, total: int, width: float, height: float) -> None:
        pdf.setFont(self.font_name, FURNITURE_FONT_SIZE)
        pdf.drawCentredString(width / 2, height - MARGIN / 2, running_header)
        pdf.drawCentredString(width / 2, MARGIN / 2, f"Page {number} of {total}")

    def _draw_line(self, pdf, line: _Line, baseline: float, width: float) -> None:
        pdf.setFont(line.font, line.size)
        if line.align == "center":
            pdf.drawCentredString(width / 2, baseline, line.text)
        elif line.align == "right":
            pdf.drawRightString(width - MARGIN, baseline, line.text)
        else:
            pdf.drawString(MARGIN + line.indent, baseline, line.text)
        if line.right_text:
            pdf.drawRightString(width - MARGIN, baseline, line.right_text)

    def _paginate(self, groups: list[_Group], available: float) -> list[list[tuple[float, _Line]]]:
        pages: list[list[tuple[float, _Line]]] = [[]]
        used = 0.0
        for group in groups:
            height = group.space_before + sum(line.leading for line in group.lines)
            if group.keep_together and pages[-1] and used + height > available and height <= available:
                pages.append([])
                used = 0.0
            for index, line in enumerate(group.lines):
                gap = group.space_before if index == 0 and pages[-1] else 0.0
                if used + gap + line.leading > available:
                    pages.append([])
                    used = 0.0
                    gap = 0.0
                pages[-1].append((gap, line))
                used += gap + line.leading
        return pages

    def _wrapped(
        self,
        text: str,
        split: Splitter,
        width: float,
        *,
        font: str | None = None,
        leading: float | None = None,
        first_indent: float = 0.0,
        indent: float = 0.0,
        align: str = "left",
    ) -> list[_Line]:
        font = font or self.font_name
        leading = leading or self.font_size * 2
        words = text.split()
        if not words:
            return [_Line("", font, self.font_size, leading, align, indent)]
        first = split(text, font, self.font_size, width - first_indent - indent)
        lines = [_Line(first[0], font, self.font_size, leading, align, indent + first_indent)]
        remainder = " ".join(words[len(first[0].split()):])
        if remainder:
            for part in split(remainder, font, self.font_size, width - indent):
                lines.append(_Line(part, font, self.font_size, leading, align, indent))
        return lines

    def _group(self, block: Block, width: float, split: Splitter) -> _Group:
        single = self.font_size * 1.4
        double = self.font_size * 2
        if isinstance(block, CourtHeader):
            lines = [_Line(block.court, self.bold_font_name, self.font_size, single, "center")]
            if block.division:
                lines.append(_Line(block.division, self.font_name, self.font_size, single, "center"))
            return _Group(lines, keep_together=True)
        if isinstance(block, CaseCaption):
            left: list[str] = []
            for caption_line in block.caption_lines:
                left.extend(split(caption_line, self.font_name, self.font_size, width * 0.6))
            right = list(block.docket_lines)
            rows = [
                _Line(
                    left[index] if index < len(left) else "",
                    self.font_name,
                    self.font_size,
                    single,
                    right_text=right[index] if index < len(right) else "",
                )
                for index in range(max(len(left), len(right)))
            ]
            return _Group(rows, keep_together=True, space_before=double)
        if isinstance(block, Title):
            lines = [
                _Line(part, self.bold_font_name, self.font_size + 2, double, "center")
                for part in split(block.text, self.bold_font_name, self.font_size + 2, width)
            ]
            return _Group(lines, keep_together=True, space_before=double)
        if isinstance(block, (OpeningStatement, ParagraphBlock)):
            return _Group(self._wrapped(block.text_lines[0], split, width, first_indent=FIRST_LINE_INDENT))
        if isinstance(block, ExhibitList):
            lines = [_Line(block.heading, self.bold_font_name, self.font_size, double)]
            for entry in block.entries:
                lines.extend(self._wrapped(entry, split, width, indent=FIRST_LINE_INDENT))
            return _Group(lines, space_before=single)
        if isinstance(block, ClosingCertification):
            lines = self._wrapped(block.text, split, width)
            for notary_line in block.notary_lines:
                lines.append(_Line(notary_line, self.font_name, self.font_size, single, indent=width / 2))
            return _Group(lines, keep_together=True, space_before=double)
        if isinstance(block, SignatureLine):
            lines = [_Line(SIGNATURE_RULE, self.font_name, self.font_size, double, indent=width / 2)]
            lines.extend(_Line(text, self.font_name, self.font_size, single, indent=width / 2) for text in block.text_lines)
            return _Group(lines, keep_together=True, space_before=double)
        if isinstance(block, (DateLocationBlock, AttorneyBlock)):
            lines = []
            for text in block.text_lines:
                lines.extend(self._wrapped(text, split, width, leading=single))
            return _Group(lines, keep_together=True, space_before=single)
        if isinstance(block, NotaryBlock):
            heading, *rest = block.lines
            lines = [_Line(heading, self.bold_font_name, self.font_size, double, "center")]
            for text in rest:
                lines.extend(self._wrapped(text, split, width, leading=single))
            return _Group(lines, keep_together=True, space_before=double)
        raise TypeError(f"unsupported block: {type(block).__name__}")
