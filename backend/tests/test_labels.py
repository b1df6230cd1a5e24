import pytest

from attest.labels import (
    add_exhibit,
    exhibit_label,
    insert_paragraph,
    move_exhibit,
    move_paragraph,
    relabel_exhibits,
    remove_exhibit,
    remove_paragraph,
    renumber_paragraphs,
    resequence,
)
from attest.models import DocumentParagraph, Exhibit, LegalDocument


def _paragraphs(count: int) -> list[DocumentParagraph]:
    return [DocumentParagraph(id=f"p{index}", content=f"Fact number {index}.") for index in range(count)]


def _exhibits(count: int) -> list[Exhibit]:
    return [Exhibit(id=f"e{index}", description=f"Record {index}") for index in range(count)]


@pytest.mark.parametrize(
    ("index", "label"),
    [(0, "A"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA"), (701, "ZZ"), (702, "Exhibit 703")],
)
def test_exhibit_label_sequence(index: int, label: str) -> None:
    assert exhibit_label(index) == label


def test_exhibit_label_rejects_negative_index() -> None:
    with pytest.raises(ValueError):
        exhibit_label(-1)


def test_removing_middle_exhibit_leaves_no_gap() -> None:
    exhibits = add_exhibit([], Exhibit(id="x", description="Lease"))
    exhibits = add_exhibit(exhibits, Exhibit(id="y", description="Ledger"))
    exhibits = add_exhibit(exhibits, Exhibit(id="z", description="Email"))

    remaining = remove_exhibit(exhibits, "y")

    assert [(item.id, item.label) for item in remaining] == [("x", "A"), ("z", "B")]


def test_add_exhibit_at_position_relabels_following_items() -> None:
    exhibits = add_exhibit(_exhibits(2), Exhibit(id="new", description="Inserted"), position=0)
    assert [(item.id, item.label) for item in exhibits] == [("new", "A"), ("e0", "B"), ("e1", "C")]


def test_move_exhibit_relabels_by_position() -> None:
    moved = move_exhibit(add_exhibit(_exhibits(2), Exhibit(id="e2")), "e2", 0)
    assert [(item.id, item.label) for item in moved] == [("e2", "A"), ("e0", "B"), ("e1", "C")]


def test_paragraph_numbers_stay_contiguous_after_edits() -> None:
    paragraphs = insert_paragraph([], DocumentParagraph(id="a", content="First statement."))
    paragraphs = insert_paragraph(paragraphs, DocumentParagraph(id="b", content="Second statement."))
    paragraphs = insert_paragraph(paragraphs, DocumentParagraph(id="c", content="Third statement."), position=1)
    assert [(item.id, item.number) for item in paragraphs] == [("a", 1), ("c", 2), ("b", 3)]

    paragraphs = remove_paragraph(paragraphs, "a")
    assert [(item.id, item.number) for item in paragraphs] == [("c", 1), ("b", 2)]


def test_move_paragraph_clamps_position() -> None:
    moved = move_paragraph(_paragraphs(3), "p0", 99)
    assert [(item.id, item.number) for item in moved] == [("p1", 1), ("p2", 2), ("p0", 3)]


def test_unknown_ids_raise_key_error() -> None:
    with pytest.raises(KeyError):
        remove_paragraph(_paragraphs(2), "missing")
    with pytest.raises(KeyError):
        move_exhibit(_exhibits(2), "missing", 0)


def test_helpers_do_not_mutate_their_input() -> None:
    original = relabel_exhibits(_exhibits(3))
    remove_exhibit(original, "e0")
    assert [(item.id, item.label) for item in original] == [("e0", "A"), ("e1", "B"), ("e2", "C")]

    paragraphs = renumber_paragraphs(_paragraphs(3))
    move_paragraph(paragraphs, "p2", 0)
    assert [(item.id, item.number) for item in paragraphs] == [("p0", 1), ("p1", 2), ("p2", 3)]


def test_loading_a_document_discards_stale_labels_and_numbers() -> None:
    document = LegalDocument.model_validate(
        {
            "type": "affidavit",
            "jurisdiction": "federal",
            "paragraphs": [
                {"id": "p1", "number": 7, "content": "One."},
                {"id": "p2", "number": 7, "content": "Two."},
            ],
            "exhibits": [{"id": "e1", "label": "Q"}, {"id": "e2", "label": "Q"}],
        }
    )
    assert [item.number for item in document.paragraphs] == [1, 2]
    assert [item.label for item in document.exhibits] == ["A", "B"]


def test_resequence_repairs_direct_list_edits() -> None:
    document = LegalDocument(type="affidavit", jurisdiction="federal", paragraphs=_paragraphs(3), exhibits=_exhibits(2))
    document.paragraphs.pop(0)
    document.exhibits.reverse()

    repaired = resequence(document)

    assert [(item.id, item.number) for item in repaired.paragraphs] == [("p1", 1), ("p2", 2)]
    assert [(item.id, item.label) for item in repaired.exhibits] == [("e1", "A"), ("e0", "B")]


def test_letter_labels_are_unique_and_ordered() -> None:
    labels = [exhibit_label(index) for index in range(702)]
    assert len(set(labels)) == len(labels)
    assert labels == sorted(labels, key=lambda label: (len(label), label))
    assert all(label.isalpha() and label.isupper() for label in labels)


def test_labels_past_zz_fall_back_to_numbers() -> None:
    assert [exhibit_label(index) for index in range(702, 1001)] == [
        f"Exhibit {index + 1}" for index in range(702, 1001)
    ]


@pytest.mark.parametrize("count", [2, 5, 27, 30])
def test_removing_second_exhibit_shifts_every_later_label(count: int) -> None:
    exhibits = relabel_exhibits(_exhibits(count))

    remaining = remove_exhibit(exhibits, "e1")

    assert [item.id for item in remaining] == ["e0", *[f"e{index}" for index in range(2, count)]]
    assert [item.label for item in remaining] == [exhibit_label(index) for index in range(count - 1)]


@pytest.mark.parametrize(
    ("moved_id", "position", "expected_ids"),
    [
        ("p2", 0, ["p2", "p0", "p1"]),
        ("p0", 2, ["p1", "p2", "p0"]),
        ("p1", 0, ["p1", "p0", "p2"]),
        ("p2", -5, ["p2", "p0", "p1"]),
    ],
)
def test_moved_paragraphs_keep_their_content(moved_id: str, position: int, expected_ids: list[str]) -> None:
    paragraphs = renumber_paragraphs(_paragraphs(3))
    content_by_id = {item.id: item.content for item in paragraphs}

    moved = move_paragraph(paragraphs, moved_id, position)

    assert [item.id for item in moved] == expected_ids
    assert [item.number for item in moved] == [1, 2, 3]
    assert all(item.content == content_by_id[item.id] for item in moved)
