"""Character-level state machine that splits a header value into groups.

The scanner knows only about quoting, comments, angle brackets and top-level
commas. It never decides whether an address is valid.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ScanState(Enum):
    NORMAL = "normal"
    IN_QUOTES = "in_quotes"
    IN_COMMENT = "in_comment"


@dataclass
class RawGroup:
    """Text of one comma-separated group, split around its ``<...>`` part.

    ``phrase`` holds everything outside comments and angle brackets, quotes
    and escapes kept verbatim. ``angle`` is None when no ``<`` was seen.
    """

    phrase: str = ""
    angle: Optional[str] = None
    comments: List[str] = field(default_factory=list)
    terminated: bool = True

    @property
    def has_angle(self) -> bool:
        return self.angle is not None

    def is_empty(self) -> bool:
        return not self.phrase.strip() and self.angle is None and not self.comments


class _GroupBuilder:
    def __init__(self):
        self._phrase = []
        self._angle = None
        self._angle_closed = False
        self._comment = None
        self._comments = []

    def add(self, ch: str):
        if self._angle is not None and not self._angle_closed:
            self._angle.append(ch)
        elif self._angle_closed:
            # Anything after the closing bracket is not part of the mailbox
            return
        else:
            self._phrase.append(ch)

    def open_angle(self) -> bool:
        if self._angle is not None:
            return False
        self._angle = []
        return True

    def close_angle(self) -> bool:
        if self._angle is None or self._angle_closed:
            return False
        self._angle_closed = True
        return True

    def open_comment(self):
        self._comment = []

    def add_comment(self, ch: str):
        self._comment.append(ch)

    def close_comment(self):
        text = "".join(self._comment).strip()
        if text:
            self._comments.append(text)
        self._comment = None
        # A comment separates phrase words the same way whitespace does
        if self._angle is None:
            self._phrase.append(" ")

    def finish(self, state: ScanState) -> RawGroup:
        if self._comment is not None:
            self.close_comment()
        return RawGroup(
            phrase="".join(self._phrase),
            angle="".join(self._angle) if self._angle is not None else None,
            comments=self._comments,
            terminated=state is ScanState.NORMAL,
        )


def split_groups(text: str) -> List[RawGroup]:
    """Split ``text`` on top-level commas, tracking quotes and comments.

    Empty groups (e.g. from a trailing comma) are left out. A group that ends
    while still inside quotes or a comment is returned with
    ``terminated=False``.
    """
    groups = []
    state = ScanState.NORMAL
    depth = 0
    current = _GroupBuilder()
    pos = 0
    length = len(text)

    while pos < length:
        ch = text[pos]

        if state is ScanState.IN_QUOTES:
            current.add(ch)
            if ch == "\\" and pos + 1 < length:
                pos += 1
                current.add(text[pos])
            elif ch == '"':
                state = ScanState.NORMAL

        elif state is ScanState.IN_COMMENT:
            if ch == "\\" and pos + 1 < length:
                pos += 1
                current.add_comment(text[pos])
            elif ch == "(":
                depth += 1
                current.add_comment(ch)
            elif ch == ")":
                depth -= 1
                if depth == 0:
                    current.close_comment()
                    state = ScanState.NORMAL
                else:
                    current.add_comment(ch)
            else:
                current.add_comment(ch)

        else:
            if ch == '"':
                current.add(ch)
                state = ScanState.IN_QUOTES
            elif ch == "(":
                current.open_comment()
                depth = 1
                state = ScanState.IN_COMMENT
            elif ch == ",":
                groups.append(current.finish(state))
                current = _GroupBuilder()
            elif ch == "<":
                if not current.open_angle():
                    current.add(ch)
            elif ch == ">":
                if not current.close_angle():
                    current.add(ch)
            else:
                current.add(ch)

        pos += 1

    groups.append(current.finish(state))
    return [g for g in groups if not g.is_empty()]
