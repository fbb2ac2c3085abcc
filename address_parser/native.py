"""Hand-rolled address-list splitter built on the character scanner."""

import re
from typing import List

from address_parser.models import AddressCandidate
from address_parser.scanner import RawGroup, split_groups

_ESCAPED_RE = re.compile(r'\\(["\\])')


def _closing_quote(text: str, start: int) -> int:
    """Index of the quote closing the quoted string opened at ``start``, or -1."""
    pos = start + 1
    while pos < len(text):
        if text[pos] == "\\":
            pos += 2
            continue
        if text[pos] == '"':
            return pos
        pos += 1
    return -1


def clean_display_name(phrase: str) -> str:
    """Strip framing quotes from a display name and unescape quoted pairs.

    Quote characters used inside the name (``Tim "The Book" O'Reilly``) are
    kept as written.
    """
    name = phrase.strip()
    if len(name) >= 2:
        if name[0] == '"' and _closing_quote(name, 0) == len(name) - 1:
            name = name[1:-1].strip()
        elif name[0] == "'" and name[-1] == "'":
            name = name[1:-1].strip()
    return _ESCAPED_RE.sub(r"\1", name)


class NativeStrategy:
    name = "native"

    def split(self, text: str) -> List[AddressCandidate]:
        return [self._to_candidate(group) for group in split_groups(text)]

    @staticmethod
    def _to_candidate(group: RawGroup) -> AddressCandidate:
        if group.has_angle:
            name = clean_display_name(group.phrase)
            if group.comments:
                name = " ".join(name.split())
            address = group.angle.strip()
        else:
            # Bare addr-spec; an old-style "addr (Name)" comment becomes the name
            name = group.comments[-1] if group.comments else ""
            address = group.phrase.strip()
        return AddressCandidate(name=name, address=address)
