from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from attest.api.contracts import PreviewResponse, TemplateInstantiateRequest, ValidationReport
from attest.assembler import assemble, collect_reference_warnings
from attest.config import settings
from attest.labels import resequence
from attest.models import LegalDocument
from attest.rendering import RendererRegistry, RenderingFailed, UnknownRendererError
from attest.templates import instantiate_template
from attest.validation import DocumentValidationError, StatusTransitionError, finalize, validate_for_finalization

logger = logging.getLogger("attest.api")


def _finalized(document: LegalDocument) -> LegalDocument:
    try:
        return finalize(document)
    except DocumentValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={
                "message": "Document is not ready for finalization.",
                "errors": exc.errors,
            },
        ) from exc
    except StatusTransitionError as exc:
        raise HTTPException(
            status_code=409,
            detail={"message": str(exc), "errors": []},
        ) from exc


def build_documents_router(*, registry: RendererRegistry) -> APIRouter:
    router = APIRouter()

    @router.post("/documents/preview")
    def preview_document(document: LegalDocument) -> PreviewResponse:
        tree = assemble(document)
        return PreviewResponse(tree=tree.to_dict(), warnings=collect_reference_warnings(document))

    @router.post("/documents/normalize")
    def normalize_document(document: LegalDocument) -> LegalDocument:
        return resequence(document)

    @router.post("/documents/validate")
    def validate_document(document: LegalDocument) -> ValidationReport:
        errors = validate_for_finalization(document)
        return ValidationReport(valid=not errors, errors=errors)

    @router.post("/documents/finalize")
    def finalize_document(document: LegalDocument) -> LegalDocument:
        finalized = _finalized(document)
        logger.info(
            "document_finalized",
            extra={"event": "document_finalized", "document_id": finalized.id, "document_type": finalized.type.value},
        )
        return finalized

    @router.post("/documents/render/{renderer_id}")
    async def render_document(
        renderer_id: str,
        document: LegalDocument,
        finalize_first: bool = Query(default=False, alias="finalize"),
    ) -> Response:
        try:
            registry.get(renderer_id)
        except UnknownRendererError as exc:
            raise HTTPException(
                status_code=404,
                detail={"message": str(exc), "available": registry.available()},
            ) from exc

        if finalize_first:
            document = _finalized(document)
        tree = assemble(document)

        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(registry.render, tree, renderer_id),
                timeout=settings.render_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            logger.warning(
                "rendering_timed_out",
                extra={
                    "event": "rendering_timed_out",
                    "renderer_id": renderer_id,
                    "document_id": document.id,
                    "timeout_seconds": settings.render_timeout_seconds,
                },
            )
            raise HTTPException(
                status_code=504,
                detail={"message": f"Rendering '{renderer_id}' output timed out.", "errors": []},
            ) from exc
        except RenderingFailed as exc:
            raise HTTPException(status_code=502, detail={"message": str(exc), "errors": []}) from exc

        logger.info(
            "document_rendered",
            extra={
                "event": "document_rendered",
                "renderer_id": result.renderer_id,
                "document_id": document.id,
                "bytes": len(result.content),
            },
        )
        return Response(
            content=result.content,
            media_type=result.content_type,
            headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
        )

    @router.post("/templates/instantiate")
    def instantiate_template_endpoint(payload: TemplateInstantiateRequest) -> LegalDocument:
        return instantiate_template(payload.template, case_info=payload.case_info, declarant=payload.declarant)

    return router
