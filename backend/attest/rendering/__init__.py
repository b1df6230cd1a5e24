from attest.rendering.base import RenderedDocument, RenderingFailed, UnknownRendererError, suggested_filename
from attest.rendering.html_renderer import render_html
from attest.rendering.registry import RendererRegistry

__all__ = [
    "RenderedDocument",
    "RendererRegistry",
    "RenderingFailed",
    "UnknownRendererError",
    "render_html",
    "suggested_filename",
]
