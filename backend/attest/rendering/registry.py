from __future__ import annotations

import logging

from attest.assembler import DocumentTree
from attest.config import Settings, settings as default_settings
from attest.rendering.base import DocumentRenderer, RenderedDocument, RenderingFailed, UnknownRendererError
from attest.rendering.docx_renderer import DocxRenderer
from attest.rendering.html_renderer import HtmlRenderer
from attest.rendering.pdf_renderer import PdfRenderer
from attest.rendering.text_renderer import PlainTextRenderer

logger = logging.getLogger("attest.rendering")


def default_renderers(settings: Settings | None = None) -> list[DocumentRenderer]:
    settings = settings or default_settings
    return [
        PlainTextRenderer(lines_per_page=settings.text_lines_per_page, line_width=settings.text_line_width),
        HtmlRenderer(),
        PdfRenderer(font_name=settings.pdf_font_name, font_size=settings.pdf_font_size),
        DocxRenderer(font_name=settings.docx_font_name, font_size_pt=settings.docx_font_size_pt),
    ]


class RendererRegistry:
    def __init__(self, renderers: list[DocumentRenderer] | None = None) -> None:
        self._renderers: dict[str, DocumentRenderer] = {}
        for renderer in renderers or default_renderers():
            self.register(renderer)

    def register(self, renderer: DocumentRenderer) -> None:
        self._renderers[renderer.renderer_id] = renderer

    def available(self) -> list[str]:
        return sorted(self._renderers)

    def get(self, renderer_id: str) -> DocumentRenderer:
        renderer = self._renderers.get(renderer_id.strip().lower())
        if renderer is None:
            raise UnknownRendererError(renderer_id)
        return renderer

    def render(self, tree: DocumentTree, renderer_id: str) -> RenderedDocument:
        renderer = self.get(renderer_id)
        try:
            return renderer.render(tree)
        except Exception as exc:
            logger.exception(
                "rendering_failed",
                extra={
                    "event": "rendering_failed",
                    "renderer_id": renderer.renderer_id,
                    "document_id": tree.document_id,
                },
            )
            raise RenderingFailed(renderer.renderer_id) from exc
