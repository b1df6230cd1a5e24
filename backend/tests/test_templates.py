from attest.models import CaseInfo, Declarant, DocumentStatus, DocumentType, Jurisdiction
from attest.templates import DocumentTemplate, instantiate_template


def _template() -> DocumentTemplate:
    return DocumentTemplate.model_validate(
        {
            "id": "business-records",
            "name": "Business Records Certification",
            "type": "certification",
            "jurisdiction": "federal",
            "category": "evidence",
            "content": {
                "personalKnowledgeStatement": "I, [NAME], am the [TITLE] of [COMPANY].",
                "paragraphs": [
                    "I am a custodian of records for [COMPANY].",
                    "The attached records were made in the regular course of business.",
                ],
            },
        }
    )


def test_instantiate_fills_declarant_tokens() -> None:
    document = instantiate_template(
        _template(),
        case_info=CaseInfo(caption="Acme Corp. v. Widget LLC", case_number="2:24-cv-01234"),
        declarant=Declarant(name="Jane Roe", title="Records Manager", organization="Acme Corp."),
    )
    assert document.type is DocumentType.CERTIFICATION
    assert document.jurisdiction is Jurisdiction.FEDERAL
    assert document.status is DocumentStatus.DRAFT
    assert document.personal_knowledge_statement == "I, Jane Roe, am the Records Manager of Acme Corp.."
    assert [(item.number, item.content) for item in document.paragraphs] == [
        (1, "I am a custodian of records for Acme Corp.."),
        (2, "The attached records were made in the regular course of business."),
    ]
    assert document.signature_block.declarant_name == "Jane Roe"
    assert document.case_info.case_number == "2:24-cv-01234"


def test_missing_values_leave_tokens_visible() -> None:
    document = instantiate_template(_template(), declarant=Declarant(name="Jane Roe"))
    assert document.personal_knowledge_statement == "I, Jane Roe, am the [TITLE] of [COMPANY]."
    assert document.exhibits == []


def test_instances_get_distinct_paragraph_ids() -> None:
    first = instantiate_template(_template())
    second = instantiate_template(_template())
    assert first.id != second.id
    assert {item.id for item in first.paragraphs}.isdisjoint({item.id for item in second.paragraphs})
