import pytest

from attest.models import DocumentStatus, LegalDocument
from attest.validation import (
    CASE_NUMBER_RULE,
    DocumentValidationError,
    StatusTransitionError,
    finalize,
    transition_status,
    validate_for_finalization,
)


def _complete_document(**overrides: object) -> LegalDocument:
    payload: dict[str, object] = {
        "type": "certification",
        "jurisdiction": "nj",
        "caseInfo": {"caption": "Smith v. Jones", "caseNumber": "MID-L-1234-24", "court": ""},
        "declarant": {"name": "Mary O'Neil"},
        "paragraphs": [{"content": "I reside at the property in question."}],
        "signatureBlock": {"location": "Trenton, New Jersey"},
    }
    payload.update(overrides)
    return LegalDocument.model_validate(payload)


def test_complete_document_has_no_errors() -> None:
    assert validate_for_finalization(_complete_document()) == []


def test_empty_document_reports_every_problem() -> None:
    errors = validate_for_finalization(LegalDocument(type="affidavit", jurisdiction="federal"))
    assert errors == [
        "Case Caption: This field is required",
        "Case Number: This field is required",
        "Declarant Name: This field is required",
        "At least one paragraph is required",
        "Signature Location: This field is required",
        "Signature Name: This field is required",
    ]


def test_caption_requires_party_separator() -> None:
    errors = validate_for_finalization(_complete_document(caseInfo={"caption": "Smith and Jones", "caseNumber": "123"}))
    assert errors == ['Case Caption: Case caption should include "v." or "vs." to separate parties']


def test_case_number_format_and_digit_rules() -> None:
    assert CASE_NUMBER_RULE.check("2:24-cv-01234") == []
    assert CASE_NUMBER_RULE.check("ABC-DEF") == ["Case number should contain at least one number"]
    assert CASE_NUMBER_RULE.check("12/34") == ["Invalid format"]
    assert CASE_NUMBER_RULE.check("1") == ["Must be at least 3 characters long"]


def test_declarant_name_rejects_digits() -> None:
    errors = validate_for_finalization(_complete_document(declarant={"name": "R2D2"}))
    assert errors == ["Declarant Name: Invalid format", "Signature Name: Invalid format"]


def test_short_paragraphs_are_reported_by_position() -> None:
    document = _complete_document(
        paragraphs=[{"content": "Long enough paragraph text."}, {"content": "Too short"}, {"content": ""}]
    )
    assert validate_for_finalization(document) == [
        "Paragraph 2: Must be at least 10 characters long",
        "Paragraph 3: This field is required",
    ]


def test_signature_name_prefers_signature_block() -> None:
    document = _complete_document(signatureBlock={"declarantName": "X", "location": "Trenton"})
    assert validate_for_finalization(document) == ["Signature Name: Must be at least 2 characters long"]


def test_finalize_sets_status_and_keeps_input_unchanged() -> None:
    document = _complete_document()
    finalized = finalize(document)
    assert finalized.status is DocumentStatus.FINAL
    assert document.status is DocumentStatus.DRAFT


def test_finalize_raises_with_full_error_list() -> None:
    with pytest.raises(DocumentValidationError) as excinfo:
        finalize(_complete_document(declarant={"name": ""}, paragraphs=[]))
    assert excinfo.value.errors == [
        "Declarant Name: This field is required",
        "At least one paragraph is required",
        "Signature Name: This field is required",
    ]


def test_status_transitions() -> None:
    filed = transition_status(finalize(_complete_document()), DocumentStatus.FILED)
    assert filed.status is DocumentStatus.FILED

    with pytest.raises(StatusTransitionError):
        transition_status(_complete_document(), DocumentStatus.FILED)
    with pytest.raises(StatusTransitionError):
        finalize(filed)
