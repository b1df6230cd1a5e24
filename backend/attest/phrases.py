"""Jurisdiction x document-type boilerplate.

Every rendering path (preview tree, text, HTML, PDF, DOCX) reads its legal
phrasing from the tables below, so the wording cannot drift between surfaces.
"""
from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from attest.models import DocumentType, Jurisdiction

if TYPE_CHECKING:
    from attest.models import LegalDocument

DATE_PLACEHOLDER = "[Date]"
LOCATION_PLACEHOLDER = "[City, State]"
JURAT_LINE = "Sworn to and subscribed before me this _____ day of __________, 20__."

_FEDERAL_DECLARATION = (
    "I, {name}, hereby declare under penalty of perjury pursuant to 28 U.S.C. § 1746 "
    "that the following is true and correct:"
)
_NEW_JERSEY_CERTIFICATION = "I, {name}, of full age, hereby certify that:"

# Keyed by (type, jurisdiction). Federal affidavits take the 1746 declaration
# rather than "being duly sworn, depose and say".
_OPENING_STATEMENTS: dict[tuple[DocumentType, Jurisdiction], str] = {
    (DocumentType.AFFIDAVIT, Jurisdiction.FEDERAL): _FEDERAL_DECLARATION,
    (DocumentType.CERTIFICATION, Jurisdiction.FEDERAL): _FEDERAL_DECLARATION,
    (DocumentType.AFFIDAVIT, Jurisdiction.NEW_JERSEY): _NEW_JERSEY_CERTIFICATION,
    (DocumentType.CERTIFICATION, Jurisdiction.NEW_JERSEY): _NEW_JERSEY_CERTIFICATION,
}
_VERIFICATION_OPENING = "{name}{title}{organization}, being duly sworn, deposes and says:"

_FEDERAL_PERJURY_CLAUSE = (
    "I declare under penalty of perjury under the laws of the United States of America "
    "that the foregoing is true and correct. Executed on {date} at {location}."
)
_NEW_JERSEY_CERTIFICATION_CLAUSE = (
    "I certify that the foregoing statements made by me are true. I am aware that if any "
    "of the foregoing statements made by me are willfully false, I am subject to punishment."
)
_CLOSING_CERTIFICATIONS: dict[Jurisdiction, str] = {
    Jurisdiction.FEDERAL: _FEDERAL_PERJURY_CLAUSE,
    Jurisdiction.NEW_JERSEY: _NEW_JERSEY_CERTIFICATION_CLAUSE,
}

_NOTARY_VENUES: dict[Jurisdiction, tuple[str, ...]] = {
    Jurisdiction.NEW_JERSEY: ("State of New Jersey", "County of __________"),
    Jurisdiction.FEDERAL: ("State of __________", "County of __________"),
}

_DEFAULT_COURTS: dict[Jurisdiction, str] = {
    Jurisdiction.FEDERAL: "UNITED STATES DISTRICT COURT",
    Jurisdiction.NEW_JERSEY: "SUPERIOR COURT OF NEW JERSEY",
}

_TITLE_PREFIXES: dict[DocumentType, str] = {
    DocumentType.AFFIDAVIT: "AFFIDAVIT",
    DocumentType.CERTIFICATION: "CERTIFICATION",
    DocumentType.VERIFICATION: "VERIFICATION",
}


def format_legal_date(value: dt.date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def resolve_opening_statement(
    document_type: DocumentType,
    jurisdiction: Jurisdiction,
    declarant_name: str,
    declarant_title: str | None = None,
    declarant_organization: str | None = None,
) -> str:
    if document_type is DocumentType.VERIFICATION:
        title = (declarant_title or "").strip()
        organization = (declarant_organization or "").strip()
        return _VERIFICATION_OPENING.format(
            name=declarant_name,
            title=f", {title}" if title else "",
            organization=f" of {organization}" if organization else "",
        )
    return _OPENING_STATEMENTS[(document_type, jurisdiction)].format(name=declarant_name)


def opening_statement_for(document: "LegalDocument", *, declarant_name: str) -> str:
    override = (document.personal_knowledge_statement or "").strip()
    if override:
        return override
    return resolve_opening_statement(
        document.type,
        document.jurisdiction,
        declarant_name,
        document.declarant.title,
        document.declarant.organization,
    )


def resolve_closing_certification(
    document_type: DocumentType,
    jurisdiction: Jurisdiction,
    executed_on: dt.date | None = None,
    location: str | None = None,
) -> str:
    if document_type is DocumentType.VERIFICATION:
        return JURAT_LINE
    clause = _CLOSING_CERTIFICATIONS[jurisdiction]
    if jurisdiction is not Jurisdiction.FEDERAL:
        return clause
    return clause.format(
        date=format_legal_date(executed_on) if executed_on else DATE_PLACEHOLDER,
        location=(location or "").strip() or LOCATION_PLACEHOLDER,
    )


def needs_notary_block(document_type: DocumentType, jurisdiction: Jurisdiction, notary_required: bool) -> bool:
    return (
        document_type is DocumentType.AFFIDAVIT
        and jurisdiction is Jurisdiction.NEW_JERSEY
        and bool(notary_required)
    )


def notary_acknowledgment_lines(jurisdiction: Jurisdiction) -> tuple[str, ...]:
    return (
        "NOTARY ACKNOWLEDGMENT",
        *_NOTARY_VENUES[jurisdiction],
        JURAT_LINE,
        "_______________________",
        "Notary Public",
        "My Commission Expires: _______________________",
    )


def verification_notary_lines() -> tuple[str, ...]:
    return ("_______________________", "Notary Public")


def attorney_party_designation(document_type: DocumentType) -> str:
    if document_type is DocumentType.VERIFICATION:
        return "Attorney for Plaintiff"
    return "Attorney for Declarant"


def default_court_name(jurisdiction: Jurisdiction) -> str:
    return _DEFAULT_COURTS[jurisdiction]


def document_title(document_type: DocumentType, declarant_name: str) -> str:
    prefix = _TITLE_PREFIXES[document_type]
    if document_type is DocumentType.VERIFICATION:
        return prefix
    return f"{prefix} OF {declarant_name.upper()}"
