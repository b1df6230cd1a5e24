from __future__ import annotations

from html import escape

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

PRINT_STYLES = """
@page { size: letter; margin: 1in; }
body { font-family: 'Times New Roman', Times, serif; font-size: 12pt; line-height: 2; margin: 0; }
.document-container { max-width: 8.5in; margin: 0 auto; background: white; }
.court-header { text-align: center; margin-bottom: 2em; }
.court-header .court { font-weight: bold; }
.case-caption { display: table; width: 100%; margin-bottom: 1em; }
.case-caption-left, .case-caption-right { display: table-cell; vertical-align: top; }
.case-caption-left { width: 70%; }
.case-caption-right { width: 30%; text-align: right; padding-left: 2em; }
.document-title { text-align: center; font-weight: bold; margin: 1.5em 0; font-size: 14pt; }
.opening-statement, .paragraph { text-indent: 0.5in; text-align: justify; margin-bottom: 1em; }
.paragraph-number { font-weight: bold; }
.exhibit-list { margin: 1em 0; padding-left: 0.5in; }
.exhibit-list-heading { font-weight: bold; }
.closing-certification { margin-top: 3em; page-break-inside: avoid; }
.signature-line { margin-top: 3em; margin-left: 50%; page-break-inside: avoid; }
.signature-rule { border-bottom: 1px solid black; width: 300px; height: 2em; }
.date-location { margin-top: 1em; }
.attorney-block { margin-top: 2em; page-break-inside: avoid; }
.notary-block { margin-top: 2em; border: 1px solid black; padding: 1em; page-break-inside: avoid; }
.notary-block .notary-heading { text-align: center; font-weight: bold; }
"""


def _lines(lines: tuple[str, ...] | list[str], css_class: str | None = None) -> str:
    attribute = f' class="{css_class}"' if css_class else ""
    return "".join(f"<div{attribute}>{escape(line)}</div>" for line in lines)


def _block_html(block: Block) -> str:
    if isinstance(block, CourtHeader):
        division = f'<div class="division">{escape(block.division)}</div>' if block.division else ""
        return f'<header class="court-header"><div class="court">{escape(block.court)}</div>{division}</header>'
    if isinstance(block, CaseCaption):
        return (
            '<section class="case-caption">'
            f'<div class="case-caption-left">{_lines(block.caption_lines)}</div>'
            f'<div class="case-caption-right">{_lines(block.docket_lines)}</div>'
            "</section>"
        )
    if isinstance(block, Title):
        return f'<h1 class="document-title">{escape(block.text)}</h1>'
    if isinstance(block, OpeningStatement):
        return f'<p class="opening-statement">{escape(block.text)}</p>'
    if isinstance(block, ParagraphBlock):
        return (
            f'<p class="paragraph" id="paragraph-{block.number}">'
            f'<span class="paragraph-number">{escape(block.marker)}</span> {escape(block.text)}</p>'
        )
    if isinstance(block, ExhibitList):
        items = "".join(f'<li class="exhibit-item">{escape(entry)}</li>' for entry in block.entries)
        return (
            '<section class="exhibit-list">'
            f'<div class="exhibit-list-heading">{escape(block.heading)}</div>'
            f'<ul style="list-style: none; padding: 0;">{items}</ul>'
            "</section>"
        )
    if isinstance(block, ClosingCertification):
        notary = f'<div class="notary-signature">{_lines(block.notary_lines)}</div>' if block.notary_lines else ""
        return f'<section class="closing-certification"><p>{escape(block.text)}</p>{notary}</section>'
    if isinstance(block, SignatureLine):
        return f'<section class="signature-line"><div class="signature-rule"></div>{_lines(block.text_lines)}</section>'
    if isinstance(block, DateLocationBlock):
        return f'<section class="date-location">{_lines(block.text_lines)}</section>'
    if isinstance(block, AttorneyBlock):
        return f'<section class="attorney-block">{_lines(block.lines)}</section>'
    if isinstance(block, NotaryBlock):
        heading, *rest = block.lines
        return (
            '<section class="notary-block">'
            f'<div class="notary-heading">{escape(heading)}</div>{_lines(rest)}'
            "</section>"
        )
    raise TypeError(f"unsupported block: {type(block).__name__}")


def render_html(tree: DocumentTree) -> str:
    body = "\n".join(_block_html(block) for block in tree.blocks)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="UTF-8">\n'
        f"<title>{escape(tree.running_header)}</title>\n"
        f"<style>{PRINT_STYLES}</style>\n"
        "</head>\n<body>\n"
        f'<div class="document-container" data-document-type="{escape(tree.document_type.value)}">\n'
        f"{body}\n</div>\n</body>\n</html>\n"
    )


class HtmlRenderer:
    renderer_id = "html"
    content_type = "text/html; charset=utf-8"
    extension = "html"

    def render(self, tree: DocumentTree) -> RenderedDocument:
        return rendered(self, tree, render_html(tree).encode("utf-8"))
