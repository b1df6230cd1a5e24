from __future__ import annotations

from io import BytesIO
import re

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

SIGNATURE_RULE = "_" * 33
DOUBLE_SPACING = 2.0
# WordprocessingML rejects C0 controls other than tab, newline and carriage return.
_XML_ILLEGAL = re.compile(r"[\x00-\x08\x0c\x0e-\x1f]")


def _xml_text(text: str) -> str:
    # Word's manual line break arrives as a vertical tab in pasted text.
    return _XML_ILLEGAL.sub("", text.replace("\x0b", "\n"))


def _add_field(paragraph, instruction: str) -> None:
    from docx.oxml import OxmlElement
    from docx.oxml.ns import qn

    simple_field = OxmlElement("w:fldSimple")
    simple_field.set(qn("w:instr"), instruction)
    run = OxmlElement("w:r")
    text = OxmlElement("w:t")
    text.text = "1"
    run.append(text)
    simple_field.append(run)
    paragraph._p.append(simple_field)


class DocxRenderer:
    """Word output: caption table, double-spaced body, running header and page-count footer."""

    renderer_id = "docx"
    content_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    extension = "docx"

    def __init__(self, *, font_name: str = "Times New Roman", font_size_pt: int = 12) -> None:
        self.font_name = font_name
        self.font_size_pt = font_size_pt

    def render(self, tree: DocumentTree) -> RenderedDocument:
        try:
            from docx import Document
            from docx.enum.text import WD_ALIGN_PARAGRAPH
            from docx.shared import Inches, Pt
        except ImportError as exc:
            raise RuntimeError("python-docx is required for DOCX rendering") from exc

        document = Document()
        normal = document.styles["Normal"]
        normal.font.name = self.font_name
        normal.font.size = Pt(self.font_size_pt)

        section = document.sections[0]
        section.page_width = Inches(8.5)
        section.page_height = Inches(11)
        for side in ("top_margin", "bottom_margin", "left_margin", "right_margin"):
            setattr(section, side, Inches(1))

        header = section.header.paragraphs[0]
        header.text = _xml_text(tree.running_header)
        header.alignment = WD_ALIGN_PARAGRAPH.CENTER

        footer = section.footer.paragraphs[0]
        footer.alignment = WD_ALIGN_PARAGRAPH.CENTER
        footer.add_run("Page ")
        _add_field(footer, "PAGE")
        footer.add_run(" of ")
        _add_field(footer, "NUMPAGES")

        for block in tree.blocks:
            self._add_block(document, block, WD_ALIGN_PARAGRAPH, Inches, Pt)

        buffer = BytesIO()
        document.save(buffer)
        return rendered(self, tree, buffer.getvalue())

    def _add_block(self, document, block: Block, align, Inches, Pt) -> None:
        def add(text: str = "", *, alignment=None, bold: bool = False, spacing: float | None = None, indent=None):
            paragraph = document.add_paragraph()
            if text:
                paragraph.add_run(_xml_text(text)).bold = bold
            if alignment is not None:
                paragraph.alignment = alignment
            if spacing is not None:
                paragraph.paragraph_format.line_spacing = spacing
            if indent is not None:
                paragraph.paragraph_format.left_indent = indent
            return paragraph

        if isinstance(block, CourtHeader):
            add(block.court, alignment=align.CENTER, bold=True)
            if block.division:
                add(block.division, alignment=align.CENTER)
        elif isinstance(block, CaseCaption):
            table = document.add_table(rows=1, cols=2)
            left, right = table.rows[0].cells
            left.width = Inches(4.5)
            right.width = Inches(2.0)
            left.text = _xml_text("\n".join(block.caption_lines))
            right.text = _xml_text(block.docket_lines[0])
            for line in block.docket_lines[1:]:
                right.add_paragraph(_xml_text(line))
            for paragraph in right.paragraphs:
                paragraph.alignment = align.RIGHT
        elif isinstance(block, Title):
            add(block.text, alignment=align.CENTER, bold=True).paragraph_format.space_before = Pt(24)
        elif isinstance(block, OpeningStatement):
            paragraph = add(block.text, spacing=DOUBLE_SPACING)
            paragraph.paragraph_format.first_line_indent = Inches(0.5)
        elif isinstance(block, ParagraphBlock):
            paragraph = document.add_paragraph()
            paragraph.add_run(block.marker).bold = True
            paragraph.add_run(_xml_text(f" {block.text}"))
            paragraph.paragraph_format.first_line_indent = Inches(0.5)
            paragraph.paragraph_format.line_spacing = DOUBLE_SPACING
        elif isinstance(block, ExhibitList):
            add(block.heading, bold=True)
            for entry in block.entries:
                add(entry, spacing=DOUBLE_SPACING, indent=Inches(0.5))
        elif isinstance(block, ClosingCertification):
            add(block.text, spacing=DOUBLE_SPACING).paragraph_format.space_before = Pt(24)
            for line in block.notary_lines:
                add(line, indent=Inches(3.25))
        elif isinstance(block, SignatureLine):
            add(SIGNATURE_RULE, indent=Inches(3.25)).paragraph_format.space_before = Pt(36)
            for line in block.text_lines:
                add(line, indent=Inches(3.25))
        elif isinstance(block, (DateLocationBlock, AttorneyBlock)):
            first = True
            for line in block.text_lines:
                paragraph = add(line)
                if first:
                    paragraph.paragraph_format.space_before = Pt(18)
                    first = False
        elif isinstance(block, NotaryBlock):
            heading, *rest = block.lines
            add(heading, alignment=align.CENTER, bold=True).paragraph_format.space_before = Pt(24)
            for line in rest:
                add(line)
        else:
            raise TypeError(f"unsupported block: {type(block).__name__}")
