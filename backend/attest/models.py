from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from attest.labels import relabel_exhibits, renumber_paragraphs


class DocumentType(str, Enum):
    AFFIDAVIT = "affidavit"
    CERTIFICATION = "certification"
    VERIFICATION = "verification"


class Jurisdiction(str, Enum):
    FEDERAL = "federal"
    NEW_JERSEY = "nj"


class DocumentStatus(str, Enum):
    DRAFT = "draft"
    FINAL = "final"
    FILED = "filed"


ExhibitType = Literal["document", "image", "video", "other"]


def _new_id() -> str:
    return uuid4().hex


class _Payload(BaseModel):
    # Form state arrives camelCased; python callers use field names.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CaseInfo(_Payload):
    caption: str = ""
    case_number: str = ""
    court: str = ""
    judge: str | None = None
    division: str | None = None


class Declarant(_Payload):
    name: str = ""
    title: str | None = None
    organization: str | None = None
    address: str | None = None


class AttorneyInfo(_Payload):
    name: str = ""
    bar_number: str = ""
    firm: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class SignatureBlock(_Payload):
    declarant_name: str = ""
    date: dt.date | None = None
    location: str | None = None
    notary_required: bool = False
    attorney_info: AttorneyInfo | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _accept_timestamps(cls, value: object) -> object:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            # Browsers post full ISO timestamps for date inputs.
            return stripped[:10]
        return value


class Exhibit(_Payload):
    id: str = Field(default_factory=_new_id, min_length=1)
    label: str = ""
    description: str = ""
    type: ExhibitType = "document"
    is_confidential: bool = False


class DocumentParagraph(_Payload):
    id: str = Field(default_factory=_new_id, min_length=1)
    number: int = 0
    content: str = ""
    exhibit_references: list[str] = Field(default_factory=list)

    @field_validator("exhibit_references")
    @classmethod
    def _dedupe_references(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        result: list[str] = []
        for item in value:
            reference = item.strip()
            if not reference or reference in seen:
                continue
            seen.add(reference)
            result.append(reference)
        return result


class LegalDocument(_Payload):
    id: str = Field(default_factory=_new_id, min_length=1)
    type: DocumentType
    jurisdiction: Jurisdiction
    case_info: CaseInfo = Field(default_factory=CaseInfo)
    declarant: Declarant = Field(default_factory=Declarant)
    personal_knowledge_statement: str | None = None
    paragraphs: list[DocumentParagraph] = Field(default_factory=list)
    exhibits: list[Exhibit] = Field(default_factory=list)
    signature_block: SignatureBlock = Field(default_factory=SignatureBlock)
    status: DocumentStatus = DocumentStatus.DRAFT

    @model_validator(mode="after")
    def _resequence(self) -> "LegalDocument":
        # Labels and numbers are projections of array order; stored values are discarded.
        self.paragraphs = renumber_paragraphs(self.paragraphs)
        self.exhibits = relabel_exhibits(self.exhibits)
        return self

    def find_exhibit(self, exhibit_id: str) -> Exhibit | None:
        for exhibit in self.exhibits:
            if exhibit.id == exhibit_id:
                return exhibit
        return None

    @property
    def signer_name(self) -> str:
        return self.signature_block.declarant_name.strip() or self.declarant.name.strip()
