"""Exhibit labels and paragraph numbers.

Both are derived from sequence order and are recomputed over the whole sequence
after every structural change, so a deletion never leaves a gap ("A, C") and a
move never leaves two paragraphs sharing a number. Every helper returns new
lists of copied items; inputs are left untouched.
"""
from __future__ import annotations

from string import ascii_uppercase
from typing import TYPE_CHECKING, Sequence, TypeVar

if TYPE_CHECKING:
    from attest.models import DocumentParagraph, Exhibit, LegalDocument

_ALPHABET_SIZE = len(ascii_uppercase)
_SINGLE_LETTER_LIMIT = _ALPHABET_SIZE
_DOUBLE_LETTER_LIMIT = _SINGLE_LETTER_LIMIT + _ALPHABET_SIZE * _ALPHABET_SIZE

_Item = TypeVar("_Item", "DocumentParagraph", "Exhibit")


def exhibit_label(index: int) -> str:
    """Label for the exhibit at zero-based ``index``: A..Z, AA..ZZ, then "Exhibit N"."""
    if index < 0:
        raise ValueError(f"exhibit index must be non-negative, got {index}")
    if index < _SINGLE_LETTER_LIMIT:
        return ascii_uppercase[index]
    if index < _DOUBLE_LETTER_LIMIT:
        first, second = divmod(index - _SINGLE_LETTER_LIMIT, _ALPHABET_SIZE)
        return ascii_uppercase[first] + ascii_uppercase[second]
    return f"Exhibit {index + 1}"


def relabel_exhibits(exhibits: Sequence["Exhibit"]) -> list["Exhibit"]:
    return [
        exhibit.model_copy(update={"label": exhibit_label(index)})
        for index, exhibit in enumerate(exhibits)
    ]


def renumber_paragraphs(paragraphs: Sequence["DocumentParagraph"]) -> list["DocumentParagraph"]:
    return [
        paragraph.model_copy(update={"number": index})
        for index, paragraph in enumerate(paragraphs, start=1)
    ]


def _index_of(items: Sequence[_Item], item_id: str) -> int:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    raise KeyError(item_id)


def _clamp_position(position: int | None, length: int) -> int:
    if position is None:
        return length
    return max(0, min(position, length))


def _inserted(items: Sequence[_Item], item: _Item, position: int | None) -> list[_Item]:
    result = list(items)
    result.insert(_clamp_position(position, len(result)), item)
    return result


def _removed(items: Sequence[_Item], item_id: str) -> list[_Item]:
    index = _index_of(items, item_id)
    return [item for offset, item in enumerate(items) if offset != index]


def _moved(items: Sequence[_Item], item_id: str, position: int) -> list[_Item]:
    result = list(items)
    item = result.pop(_index_of(result, item_id))
    result.insert(_clamp_position(position, len(result)), item)
    return result


def insert_paragraph(
    paragraphs: Sequence["DocumentParagraph"],
    paragraph: "DocumentParagraph",
    position: int | None = None,
) -> list["DocumentParagraph"]:
    """Insert at zero-based ``position`` (append when None) and renumber."""
    return renumber_paragraphs(_inserted(paragraphs, paragraph, position))


def remove_paragraph(paragraphs: Sequence["DocumentParagraph"], paragraph_id: str) -> list["DocumentParagraph"]:
    return renumber_paragraphs(_removed(paragraphs, paragraph_id))


def move_paragraph(
    paragraphs: Sequence["DocumentParagraph"], paragraph_id: str, position: int
) -> list["DocumentParagraph"]:
    return renumber_paragraphs(_moved(paragraphs, paragraph_id, position))


def add_exhibit(
    exhibits: Sequence["Exhibit"],
    exhibit: "Exhibit",
    position: int | None = None,
) -> list["Exhibit"]:
    return relabel_exhibits(_inserted(exhibits, exhibit, position))


def remove_exhibit(exhibits: Sequence["Exhibit"], exhibit_id: str) -> list["Exhibit"]:
    # Paragraph references to the removed exhibit are left alone; they resolve fail-open.
    return relabel_exhibits(_removed(exhibits, exhibit_id))


def move_exhibit(exhibits: Sequence["Exhibit"], exhibit_id: str, position: int) -> list["Exhibit"]:
    return relabel_exhibits(_moved(exhibits, exhibit_id, position))


def resequence(document: "LegalDocument") -> "LegalDocument":
    return document.model_copy(
        update={
            "paragraphs": renumber_paragraphs(document.paragraphs),
            "exhibits": relabel_exhibits(document.exhibits),
        }
    )
