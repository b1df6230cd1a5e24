from __future__ import annotations

from dataclasses import dataclass
import textwrap

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

PAGE_SEPARATOR = "\f"
SIGNATURE_RULE = "_" * 33
_INDENT = " " * 5
# Running header, spacer, spacer, footer.
_PAGE_FURNITURE_LINES = 4


@dataclass(frozen=True)
class _Chunk:
    lines: list[str]
    keep_together: bool = False


class PlainTextRenderer:
    """Fixed-width print layout: form-feed separated pages with header and page footer."""

    renderer_id = "text"
    content_type = "text/plain; charset=utf-8"
    extension = "txt"

    def __init__(self, *, lines_per_page: int = 54, line_width: int = 78) -> None:
        if lines_per_page <= _PAGE_FURNITURE_LINES + 1:
            raise ValueError("lines_per_page leaves no room for body text")
        if line_width < 20:
            raise ValueError("line_width must be at least 20 characters")
        self.lines_per_page = lines_per_page
        self.line_width = line_width

    def render(self, tree: DocumentTree) -> RenderedDocument:
        pages = self.paginate(tree.running_header, self.layout(tree))
        return rendered(self, tree, PAGE_SEPARATOR.join(pages).encode("utf-8"))

    def layout(self, tree: DocumentTree) -> list[_Chunk]:
        chunks: list[_Chunk] = []
        for block in tree.blocks:
            if chunks:
                chunks.append(_Chunk(lines=[""]))
            chunks.append(self._block_chunk(block))
        return chunks

    def paginate(self, running_header: str, chunks: list[_Chunk]) -> list[str]:
        capacity = self.lines_per_page - _PAGE_FURNITURE_LINES
        bodies: list[list[str]] = [[]]
        for chunk in chunks:
            current = bodies[-1]
            remaining = capacity - len(current)
            if chunk.keep_together and current and len(chunk.lines) > remaining and len(chunk.lines) <= capacity:
                bodies.append([])
            for line in chunk.lines:
                if len(bodies[-1]) >= capacity:
                    bodies.append([])
                if not line and not bodies[-1]:
                    continue
                bodies[-1].append(line)

        total = len(bodies)
        header = running_header[: self.line_width].center(self.line_width).rstrip()
        pages: list[str] = []
        for number, body in enumerate(bodies, start=1):
            footer = f"Page {number} of {total}".center(self.line_width).rstrip()
            padding = [""] * (capacity - len(body))
            pages.append("\n".join([header, "", *body, *padding, "", footer]) + "\n")
        return pages

    def _wrap(self, text: str, *, indent: str = "", first_indent: str | None = None, width: int | None = None) -> list[str]:
        wrapped = textwrap.wrap(
            text,
            width=width or self.line_width,
            initial_indent=indent if first_indent is None else first_indent,
            subsequent_indent=indent,
            break_on_hyphens=False,
        )
        return wrapped or [""]

    def _centered(self, lines: tuple[str, ...]) -> list[str]:
        result: list[str] = []
        for line in lines:
            result.extend(part.center(self.line_width).rstrip() for part in self._wrap(line))
        return result

    def _right_column(self, lines: tuple[str, ...]) -> list[str]:
        offset = " " * (self.line_width // 2)
        result: list[str] = []
        for line in lines:
            result.extend(self._wrap(line, indent=offset))
        return result

    def _caption_rows(self, block: CaseCaption) -> list[str]:
        left_width = int(self.line_width * 0.6)
        right_width = self.line_width - left_width
        left: list[str] = []
        for line in block.caption_lines:
            left.extend(self._wrap(line, width=left_width - 2))
        right: list[str] = []
        for line in block.docket_lines:
            right.extend(self._wrap(line, width=right_width))
        rows: list[str] = []
        for index in range(max(len(left), len(right))):
            left_text = left[index] if index < len(left) else ""
            right_text = right[index] if index < len(right) else ""
            rows.append((left_text.ljust(left_width) + right_text.rjust(right_width)).rstrip())
        return rows

    def _block_chunk(self, block: Block) -> _Chunk:
        if isinstance(block, (CourtHeader, Title)):
            return _Chunk(lines=self._centered(block.text_lines), keep_together=True)
        if isinstance(block, CaseCaption):
            return _Chunk(lines=self._caption_rows(block), keep_together=True)
        if isinstance(block, OpeningStatement):
            return _Chunk(lines=self._wrap(block.text, first_indent=_INDENT))
        if isinstance(block, ParagraphBlock):
            return _Chunk(lines=self._wrap(block.text_lines[0], first_indent=_INDENT))
        if isinstance(block, ExhibitList):
            lines = [block.heading]
            for entry in block.entries:
                lines.extend(self._wrap(entry, indent=_INDENT))
            return _Chunk(lines=lines)
        if isinstance(block, ClosingCertification):
            lines = self._wrap(block.text)
            if block.notary_lines:
                lines.extend(["", *self._right_column(block.notary_lines)])
            return _Chunk(lines=lines, keep_together=True)
        if isinstance(block, SignatureLine):
            return _Chunk(lines=["", *self._right_column((SIGNATURE_RULE, *block.text_lines))], keep_together=True)
        if isinstance(block, (DateLocationBlock, AttorneyBlock)):
            lines: list[str] = []
            for line in block.text_lines:
                lines.extend(self._wrap(line))
            return _Chunk(lines=lines, keep_together=True)
        if isinstance(block, NotaryBlock):
            heading, *rest = block.lines
            lines = self._centered((heading,))
            for line in rest:
                lines.extend(self._wrap(line))
            return _Chunk(lines=lines, keep_together=True)
        raise TypeError(f"unsupported block: {type(block).__name__}")
