from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Protocol

from attest.assembler import DocumentTree
from attest.models import DocumentType

FALLBACK_FILENAME_STEM = "document"


@dataclass(frozen=True)
class RenderedDocument:
    renderer_id: str
    content: bytes
    content_type: str
    filename: str


class RenderingFailed(RuntimeError):
    """Opaque failure of a rendering backend; the cause is chained, never exposed."""

    def __init__(self, renderer_id: str) -> None:
        self.renderer_id = renderer_id
        super().__init__(f"Rendering failed for '{renderer_id}' output.")


class UnknownRendererError(LookupError):
    def __init__(self, renderer_id: str) -> None:
        self.renderer_id = renderer_id
        super().__init__(f"No renderer registered for '{renderer_id}'.")


class DocumentRenderer(Protocol):
    renderer_id: str
    content_type: str
    extension: str

    def render(self, tree: DocumentTree) -> RenderedDocument:
        ...


def suggested_filename(case_number: str, document_type: DocumentType, extension: str) -> str:
    stem = re.sub(r"[^a-z0-9]", "_", case_number.strip(), flags=re.IGNORECASE) or FALLBACK_FILENAME_STEM
    return f"{stem}_{document_type.value}.{extension}"


def rendered(renderer: DocumentRenderer, tree: DocumentTree, content: bytes) -> RenderedDocument:
    return RenderedDocument(
        renderer_id=renderer.renderer_id,
        content=content,
        content_type=renderer.content_type,
        filename=suggested_filename(tree.case_number, tree.document_type, renderer.extension),
    )
