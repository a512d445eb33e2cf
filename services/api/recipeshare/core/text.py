import re
from typing import Iterable, Optional


def collapse_ws(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def blank_to_none(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = text.strip()
    return text or None


def normalize_tags(tags: Optional[Iterable[str]]) -> Optional[list[str]]:
    """Trim tags, drop blanks and case-insensitive duplicates.

    Returns None for an empty result so the column stays NULL.
    """
    if not tags:
        return None
    seen = set()
    out = []
    for tag in tags:
        t = collapse_ws(tag)
        if not t or t.lower() in seen:
            continue
        seen.add(t.lower())
        out.append(t)
    return out or None
