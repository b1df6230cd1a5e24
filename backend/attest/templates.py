from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from attest.models import (
    CaseInfo,
    Declarant,
    DocumentParagraph,
    DocumentType,
    Jurisdiction,
    LegalDocument,
    SignatureBlock,
)

NAME_TOKEN = "[NAME]"
TITLE_TOKEN = "[TITLE]"
COMPANY_TOKEN = "[COMPANY]"


class TemplateContent(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    personal_knowledge_statement: str | None = None
    paragraphs: list[str] = Field(default_factory=list)


class DocumentTemplate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=160)
    type: DocumentType
    jurisdiction: Jurisdiction
    description: str | None = None
    category: str | None = None
    content: TemplateContent = Field(default_factory=TemplateContent)


def _fill(text: str, declarant: Declarant) -> str:
    # Tokens without a value stay bracketed so the drafter can still see them.
    replacements = {
        NAME_TOKEN: declarant.name.strip(),
        TITLE_TOKEN: (declarant.title or "").strip(),
        COMPANY_TOKEN: (declarant.organization or "").strip(),
    }
    for token, value in replacements.items():
        if value:
            text = text.replace(token, value)
    return text


def instantiate_template(
    template: DocumentTemplate,
    *,
    case_info: CaseInfo | None = None,
    declarant: Declarant | None = None,
) -> LegalDocument:
    """Start a draft from ``template``; paragraphs are numbered by the model itself."""
    declarant = declarant or Declarant()
    statement = template.content.personal_knowledge_statement
    return LegalDocument(
        type=template.type,
        jurisdiction=template.jurisdiction,
        case_info=case_info or CaseInfo(),
        declarant=declarant,
        personal_knowledge_statement=_fill(statement, declarant) if statement else None,
        paragraphs=[DocumentParagraph(content=_fill(text, declarant)) for text in template.content.paragraphs],
        signature_block=SignatureBlock(declarant_name=declarant.name),
    )
