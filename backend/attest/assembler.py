from __future__ import annotations

from dataclasses import asdict, dataclass, field
import logging
from typing import ClassVar, Union

from attest.labels import resequence
from attest.models import DocumentType, Jurisdiction, LegalDocument
from attest.phrases import (
    attorney_party_designation,
    default_court_name,
    document_title,
    format_legal_date,
    needs_notary_block,
    notary_acknowledgment_lines,
    opening_statement_for,
    resolve_closing_certification,
    verification_notary_lines,
)
from attest.references import dangling_references, resolve_references

logger = logging.getLogger("attest.engine")

DECLARANT_PLACEHOLDER = "[Declarant Name]"
CAPTION_PLACEHOLDER = "[Case Caption]"
CASE_NUMBER_PLACEHOLDER = "[Case Number]"
CASE_NUMBER_PREFIX = "Civil Action No."
EXHIBIT_LIST_HEADING = "EXHIBITS:"


def _clean(value: str | None) -> str:
    return (value or "").strip()


@dataclass(frozen=True)
class CourtHeader:
    kind: ClassVar[str] = "court_header"
    court: str
    division: str | None = None

    @property
    def text_lines(self) -> tuple[str, ...]:
        return (self.court, self.division) if self.division else (self.court,)


@dataclass(frozen=True)
class CaseCaption:
    kind: ClassVar[str] = "case_caption"
    caption: str
    case_number: str
    judge: str | None = None

    @property
    def caption_lines(self) -> tuple[str, ...]:
        return tuple(line.strip() for line in self.caption.splitlines() if line.strip()) or (self.caption,)

    @property
    def docket_lines(self) -> tuple[str, ...]:
        lines = (f"{CASE_NUMBER_PREFIX} {self.case_number}",)
        if self.judge:
            lines += (f"Judge: {self.judge}",)
        return lines

    @property
    def text_lines(self) -> tuple[str, ...]:
        return self.caption_lines + self.docket_lines


@dataclass(frozen=True)
class Title:
    kind: ClassVar[str] = "title"
    text: str

    @property
    def text_lines(self) -> tuple[str, ...]:
        return (self.text,)


@dataclass(frozen=True)
class OpeningStatement:
    kind: ClassVar[str] = "opening_statement"
    text: str

    @property
    def text_lines(self) -> tuple[str, ...]:
        return (self.text,)


@dataclass(frozen=True)
class ParagraphBlock:
    kind: ClassVar[str] = "paragraph"
    paragraph_id: str
    number: int
    text: str

    @property
    def marker(self) -> str:
        return f"{self.number}."

    @property
    def text_lines(self) -> tuple[str, ...]:
        return (f"{self.marker} {self.text}",)


@dataclass(frozen=True)
class ExhibitList:
    kind: ClassVar[str] = "exhibit_list"
    entries: tuple[str, ...]
    heading: str = EXHIBIT_LIST_HEADING

    @property
    def text_lines(self) -> tuple[str, ...]:
        return (self.heading, *self.entries)


@dataclass(frozen=True)
class ClosingCertification:
    kind: ClassVar[str] = "closing_certification"
    text: str
    notary_lines: tuple[str, ...] = ()

    @property
    def text_lines(self) -> tuple[str, ...]:
        return (self.text, *self.notary_lines)


@dataclass(frozen=True)
class SignatureLine:
    kind: ClassVar[str] = "signature_line"
    name: str
    title: str | None = None
    organization: str | None = None

    @property
    def text_lines(self) -> tuple[str, ...]:
        return tuple(line for line in (self.name, self.title, self.organization) if line)


@dataclass(frozen=True)
class DateLocationBlock:
    kind: ClassVar[str] = "date_location"
    date: str | None = None
    location: str | None = None

    @property
    def text_lines(self) -> tuple[str, ...]:
        lines: tuple[str, ...] = ()
        if self.date:
            lines += (f"Dated: {self.date}",)
        if self.location:
            lines += (f"Location: {self.location}",)
        return lines


@dataclass(frozen=True)
class AttorneyBlock:
    kind: ClassVar[str] = "attorney_block"
    lines: tuple[str, ...]

    @property
    def text_lines(self) -> tuple[str, ...]:
        return self.lines


@dataclass(frozen=True)
class NotaryBlock:
    kind: ClassVar[str] = "notary_block"
    lines: tuple[str, ...]

    @property
    def text_lines(self) -> tuple[str, ...]:
        return self.lines


Block = Union[
    CourtHeader,
    CaseCaption,
    Title,
    OpeningStatement,
    ParagraphBlock,
    ExhibitList,
    ClosingCertification,
    SignatureLine,
    DateLocationBlock,
    AttorneyBlock,
    NotaryBlock,
]


@dataclass(frozen=True)
class DocumentTree:
    document_id: str
    document_type: DocumentType
    jurisdiction: Jurisdiction
    case_number: str
    running_header: str
    blocks: tuple[Block, ...] = field(default_factory=tuple)

    def blocks_of(self, block_type: type) -> list[Block]:
        return [block for block in self.blocks if isinstance(block, block_type)]

    def to_dict(self) -> dict[str, object]:
        return {
            "document_id": self.document_id,
            "document_type": self.document_type.value,
            "jurisdiction": self.jurisdiction.value,
            "case_number": self.case_number,
            "running_header": self.running_header,
            "blocks": [{"kind": block.kind, **asdict(block)} for block in self.blocks],
        }


def _attorney_block(document: LegalDocument) -> AttorneyBlock | None:
    attorney = document.signature_block.attorney_info
    if attorney is None or not _clean(attorney.name):
        return None
    lines = [f"{_clean(attorney.name)}, Esq."]
    optional_lines = (
        (attorney.firm, "{}"),
        (attorney.address, "{}"),
        (attorney.phone, "Tel: {}"),
        (attorney.email, "Email: {}"),
        (attorney.bar_number, "Attorney ID: {}"),
    )
    for value, template in optional_lines:
        if _clean(value):
            lines.append(template.format(_clean(value)))
    lines.append(attorney_party_designation(document.type))
    return AttorneyBlock(lines=tuple(lines))


def _paragraph_blocks(document: LegalDocument) -> list[ParagraphBlock]:
    blocks: list[ParagraphBlock] = []
    for paragraph in document.paragraphs:
        blocks.append(
            ParagraphBlock(
                paragraph_id=paragraph.id,
                number=paragraph.number,
                text=resolve_references(paragraph.content, paragraph.exhibit_references, document.exhibits),
            )
        )
    return blocks


def _exhibit_entry(label: str, description: str, is_confidential: bool) -> str:
    suffix = " (CONFIDENTIAL)" if is_confidential else ""
    return f"Exhibit {label} - {description}{suffix}"


def assemble(document: LegalDocument) -> DocumentTree:
    """Build the ordered block tree for ``document``.

    Never raises for missing data: blank required fields become bracketed
    placeholders so an in-progress draft always previews. Finalization is the
    place that rejects incomplete documents.
    """
    document = resequence(document)
    case_info = document.case_info
    declarant_name = _clean(document.declarant.name) or DECLARANT_PLACEHOLDER
    signer_name = document.signer_name or DECLARANT_PLACEHOLDER
    caption = _clean(case_info.caption) or CAPTION_PLACEHOLDER
    case_number = _clean(case_info.case_number) or CASE_NUMBER_PLACEHOLDER
    signature = document.signature_block

    blocks: list[Block] = [
        CourtHeader(
            court=_clean(case_info.court) or default_court_name(document.jurisdiction),
            division=_clean(case_info.division) or None,
        ),
        CaseCaption(caption=caption, case_number=case_number, judge=_clean(case_info.judge) or None),
        Title(text=document_title(document.type, declarant_name)),
        OpeningStatement(text=opening_statement_for(document, declarant_name=declarant_name)),
    ]
    blocks.extend(_paragraph_blocks(document))

    if document.exhibits:
        blocks.append(
            ExhibitList(
                entries=tuple(
                    _exhibit_entry(exhibit.label, exhibit.description, exhibit.is_confidential)
                    for exhibit in document.exhibits
                )
            )
        )

    blocks.append(
        ClosingCertification(
            text=resolve_closing_certification(
                document.type,
                document.jurisdiction,
                signature.date,
                signature.location,
            ),
            notary_lines=verification_notary_lines() if document.type is DocumentType.VERIFICATION else (),
        )
    )
    blocks.append(
        SignatureLine(
            name=signer_name,
            title=_clean(document.declarant.title) or None,
            organization=_clean(document.declarant.organization) or None,
        )
    )

    location = _clean(signature.location)
    if signature.date or location:
        blocks.append(
            DateLocationBlock(
                date=format_legal_date(signature.date) if signature.date else None,
                location=location or None,
            )
        )

    attorney_block = _attorney_block(document)
    if attorney_block is not None:
        blocks.append(attorney_block)

    if needs_notary_block(document.type, document.jurisdiction, signature.notary_required):
        blocks.append(NotaryBlock(lines=notary_acknowledgment_lines(document.jurisdiction)))

    tree = DocumentTree(
        document_id=document.id,
        document_type=document.type,
        jurisdiction=document.jurisdiction,
        case_number=_clean(case_info.case_number),
        running_header=f"{caption} - {case_number}",
        blocks=tuple(blocks),
    )
    logger.debug(
        "document_assembled",
        extra={
            "event": "document_assembled",
            "document_id": document.id,
            "document_type": document.type.value,
            "jurisdiction": document.jurisdiction.value,
            "block_count": len(tree.blocks),
        },
    )
    return tree


def collect_reference_warnings(document: LegalDocument) -> list[dict[str, object]]:
    warnings: list[dict[str, object]] = []
    for paragraph in document.paragraphs:
        missing = dangling_references(paragraph, document.exhibits)
        if not missing:
            continue
        warnings.append(
            {
                "code": "dangling_exhibit_reference",
                "message": f"Paragraph {paragraph.number} references exhibits that no longer exist.",
                "details": {"paragraph_id": paragraph.id, "exhibit_ids": missing},
            }
        )
    if warnings:
        logger.warning(
            "dangling_exhibit_references",
            extra={"event": "dangling_exhibit_references", "document_id": document.id, "count": len(warnings)},
        )
    return warnings
