from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from attest.models import CaseInfo, Declarant
from attest.templates import DocumentTemplate


class TemplateInstantiateRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    template: DocumentTemplate
    case_info: CaseInfo | None = None
    declarant: Declarant | None = None


class ValidationReport(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


class PreviewResponse(BaseModel):
    tree: dict[str, object]
    warnings: list[dict[str, object]] = Field(default_factory=list)
