from __future__ import annotations

import re
from typing import Sequence

from attest.models import DocumentParagraph, Exhibit


def reference_token(exhibit_id: str) -> str:
    return f"[{exhibit_id}]"


def exhibit_citation(label: str) -> str:
    return f"(Ex. {label})"


def _drop_token(text: str, token: str) -> str:
    # Only the blanks touching the token are folded; other spacing is kept.
    pattern = re.compile(r"([ \t]*)" + re.escape(token) + r"([ \t]*)")

    def replacement(match: re.Match[str]) -> str:
        if match.start() == 0 or match.end() == len(match.string):
            return ""
        return " " if match.group(1) and match.group(2) else ""

    return pattern.sub(replacement, text)


def resolve_references(
    paragraph_text: str,
    exhibit_reference_ids: Sequence[str],
    exhibits: Sequence[Exhibit],
    *,
    drop_dangling: bool = False,
) -> str:
    """Rewrite ``[<exhibit id>]`` tokens into ``(Ex. <label>)`` citations.

    Only ids listed in ``exhibit_reference_ids`` are touched, in list order. An id
    whose exhibit no longer exists keeps its literal token unless
    ``drop_dangling`` is set, in which case the token is removed. Neither case
    raises. Running the function on its own output is a no-op.
    """
    by_id = {exhibit.id: exhibit for exhibit in exhibits}
    text = paragraph_text
    for exhibit_id in exhibit_reference_ids:
        token = reference_token(exhibit_id)
        exhibit = by_id.get(exhibit_id)
        if exhibit is not None:
            text = text.replace(token, exhibit_citation(exhibit.label))
        elif drop_dangling:
            text = _drop_token(text, token)
    return text


def dangling_references(paragraph: DocumentParagraph, exhibits: Sequence[Exhibit]) -> list[str]:
    known = {exhibit.id for exhibit in exhibits}
    return [exhibit_id for exhibit_id in paragraph.exhibit_references if exhibit_id not in known]
