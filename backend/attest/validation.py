from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Callable

from attest.models import DocumentStatus, LegalDocument

logger = logging.getLogger("attest.engine")

_ALLOWED_TRANSITIONS: dict[DocumentStatus, set[DocumentStatus]] = {
    DocumentStatus.DRAFT: {DocumentStatus.FINAL},
    DocumentStatus.FINAL: {DocumentStatus.FILED},
    DocumentStatus.FILED: set(),
}


class DocumentValidationError(ValueError):
    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


class StatusTransitionError(ValueError):
    def __init__(self, current: DocumentStatus, target: DocumentStatus) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move a {current.value} document to {target.value}.")


@dataclass(frozen=True)
class FieldRule:
    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | None = None
    custom: Callable[[str], str | None] | None = None

    def check(self, value: str | None) -> list[str]:
        text = value or ""
        if not text.strip():
            return ["This field is required"] if self.required else []

        errors: list[str] = []
        if self.min_length is not None and len(text) < self.min_length:
            errors.append(f"Must be at least {self.min_length} characters long")
        if self.max_length is not None and len(text) > self.max_length:
            errors.append(f"Must be no more than {self.max_length} characters long")
        if self.pattern is not None and not self.pattern.search(text):
            errors.append("Invalid format")
        if self.custom is not None:
            message = self.custom(text)
            if message:
                errors.append(message)
        return errors


def _caption_has_party_separator(value: str) -> str | None:
    if "v." not in value and "vs." not in value:
        return 'Case caption should include "v." or "vs." to separate parties'
    return None


def _case_number_has_digit(value: str) -> str | None:
    if not re.search(r"\d", value):
        return "Case number should contain at least one number"
    return None


CASE_CAPTION_RULE = FieldRule(required=True, min_length=5, max_length=500, custom=_caption_has_party_separator)
CASE_NUMBER_RULE = FieldRule(
    required=True,
    min_length=3,
    max_length=50,
    pattern=re.compile(r"^[A-Z0-9\-:]+$", flags=re.IGNORECASE),
    custom=_case_number_has_digit,
)
DECLARANT_NAME_RULE = FieldRule(
    required=True,
    min_length=2,
    max_length=100,
    pattern=re.compile(r"^[a-zA-Z\s.\-']+$"),
)
PARAGRAPH_CONTENT_RULE = FieldRule(required=True, min_length=10, max_length=2000)
SIGNATURE_LOCATION_RULE = FieldRule(required=True, min_length=2, max_length=100)


def _collect(errors: list[str], label: str, rule: FieldRule, value: str | None) -> None:
    problems = rule.check(value)
    if problems:
        errors.append(f"{label}: {', '.join(problems)}")


def validate_for_finalization(document: LegalDocument) -> list[str]:
    """Every rule a document must satisfy before it can be finalized.

    All rules run; the result lists every violation in a stable order (case
    basics, then content, then signature) so a form can show them together.
    """
    errors: list[str] = []

    _collect(errors, "Case Caption", CASE_CAPTION_RULE, document.case_info.caption)
    _collect(errors, "Case Number", CASE_NUMBER_RULE, document.case_info.case_number)
    _collect(errors, "Declarant Name", DECLARANT_NAME_RULE, document.declarant.name)

    if not document.paragraphs:
        errors.append("At least one paragraph is required")
    for index, paragraph in enumerate(document.paragraphs, start=1):
        _collect(errors, f"Paragraph {index}", PARAGRAPH_CONTENT_RULE, paragraph.content)

    _collect(errors, "Signature Location", SIGNATURE_LOCATION_RULE, document.signature_block.location)
    _collect(errors, "Signature Name", DECLARANT_NAME_RULE, document.signer_name)
    return errors


def transition_status(document: LegalDocument, target: DocumentStatus) -> LegalDocument:
    if target not in _ALLOWED_TRANSITIONS[document.status]:
        raise StatusTransitionError(document.status, target)
    return document.model_copy(update={"status": target})


def finalize(document: LegalDocument) -> LegalDocument:
    errors = validate_for_finalization(document)
    if errors:
        logger.info(
            "finalization_rejected",
            extra={"event": "finalization_rejected", "document_id": document.id, "error_count": len(errors)},
        )
        raise DocumentValidationError(errors)
    return transition_status(document, DocumentStatus.FINAL)
