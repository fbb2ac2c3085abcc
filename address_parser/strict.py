"""RFC 2822 literal address-list parser.

Tokenizes the header value into atoms, quoted-strings, comments and
specials, then walks the ``address-list`` grammar. Display names are rebuilt
from their words, so quote characters never survive into a name and
characters outside the phrase grammar are dropped.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from address_parser.models import AddressCandidate

ATOM = "atom"
QUOTED = "quoted"
COMMENT = "comment"
LITERAL = "literal"
SPECIAL = "special"
BAD = "bad"

_WSP = " \t\r\n"
_ATEXT_SYMBOLS = "!#$%&'*+-/=?^_`{|}~"
_SPECIALS = ".<>:;@,"


def _is_atext(ch: str) -> bool:
    return ch.isalnum() or ch in _ATEXT_SYMBOLS or ord(ch) > 127


@dataclass
class Token:
    kind: str
    value: str
    start: int
    end: int
    space_before: bool = False

    def is_special(self, ch: str) -> bool:
        return self.kind == SPECIAL and self.value == ch


def _read_delimited(text: str, pos: int, close: str, nests: bool = False):
    """Read from the opening delimiter at ``pos`` up to its match.

    Returns the unescaped content and the position after the closing
    delimiter (or the end of the text when it is missing).
    """
    opener = text[pos]
    depth = 1
    out = []
    pos += 1
    while pos < len(text):
        ch = text[pos]
        if ch == "\\" and pos + 1 < len(text):
            out.append(text[pos + 1])
            pos += 2
            continue
        if nests and ch == opener:
            depth += 1
        elif ch == close:
            depth -= 1
            if depth == 0:
                return "".join(out), pos + 1
        out.append(ch)
        pos += 1
    return "".join(out), pos


def tokenize(text: str) -> List[Token]:
    tokens = []
    pos = 0
    space = False
    while pos < len(text):
        ch = text[pos]
        start = pos
        if ch in _WSP:
            space = True
            pos += 1
            continue
        if ch == '"':
            value, pos = _read_delimited(text, pos, '"')
            kind = QUOTED
        elif ch == "(":
            value, pos = _read_delimited(text, pos, ")", nests=True)
            tokens.append(Token(COMMENT, value.strip(), start, pos, space))
            # A comment separates words like whitespace does
            space = True
            continue
        elif ch == "[":
            value, pos = _read_delimited(text, pos, "]")
            value = "[" + value + "]"
            kind = LITERAL
        elif ch in _SPECIALS:
            value = ch
            pos += 1
            kind = SPECIAL
        elif _is_atext(ch):
            while pos < len(text) and _is_atext(text[pos]):
                pos += 1
            value = text[start:pos]
            kind = ATOM
        else:
            value = ch
            pos += 1
            kind = BAD
        tokens.append(Token(kind, value, start, pos, space))
        space = False
    return tokens


def _quote_local(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def join_phrase(words: List[Token]) -> str:
    """Rebuild a display name from phrase tokens, one space between words."""
    name = ""
    for tok in words:
        if tok.kind == BAD or not tok.value:
            continue
        if name and tok.space_before:
            name += " "
        name += tok.value
    return name.strip()


class AddressSyntaxError(Exception):
    pass


class _Parser:
    def __init__(self, text: str):
        self._text = text
        self._tokens = tokenize(text)
        self._pos = 0
        self._comments: List[str] = []

    # --- token stream ---
    def _peek(self) -> Optional[Token]:
        while self._pos < len(self._tokens):
            tok = self._tokens[self._pos]
            if tok.kind != COMMENT:
                return tok
            if tok.value:
                self._comments.append(tok.value)
            self._pos += 1
        return None

    def _advance(self) -> Token:
        tok = self._peek()
        self._pos += 1
        return tok

    def _peek_special(self, ch: str) -> bool:
        tok = self._peek()
        return tok is not None and tok.is_special(ch)

    def _expect(self, ch: str, message: str):
        if not self._peek_special(ch):
            raise AddressSyntaxError(message)
        self._advance()

    def _raw(self, start: int) -> str:
        if self._pos <= start:
            return ""
        end = self._tokens[self._pos - 1].end
        return self._text[self._tokens[start].start:end].strip()

    def _skip_to(self, stops: str):
        while self._pos < len(self._tokens):
            tok = self._tokens[self._pos]
            if tok.kind == SPECIAL and tok.value in stops:
                return
            self._pos += 1

    # --- grammar ---
    def parse(self) -> List[AddressCandidate]:
        candidates = []
        while True:
            # Comments collected from here on belong to the next address
            self._comments = []
            tok = self._peek()
            if tok is None:
                break
            if tok.is_special(","):
                self._advance()
                continue
            candidates.extend(self._guarded(self._address, ","))
        return candidates

    def _guarded(self, rule: Callable[[], List[AddressCandidate]], stops: str):
        start = self._pos
        try:
            return rule()
        except AddressSyntaxError as exc:
            self._skip_to(stops)
            return [AddressCandidate(name="", address=self._raw(start), error=str(exc))]

    def _address(self) -> List[AddressCandidate]:
        words = self._phrase()
        if words and self._peek_special(":"):
            self._advance()
            return self._group()
        return [self._mailbox_after(words, in_group=False)]

    def _group(self) -> List[AddressCandidate]:
        members = []
        while True:
            self._comments = []
            tok = self._peek()
            if tok is None:
                break
            if tok.is_special(";"):
                self._advance()
                break
            if tok.is_special(","):
                self._advance()
                continue
            members.extend(self._guarded(self._group_member, ",;"))
        return members

    def _group_member(self) -> List[AddressCandidate]:
        return [self._mailbox_after(self._phrase(), in_group=True)]

    def _phrase(self) -> List[Token]:
        words = []
        while True:
            tok = self._peek()
            if tok is None:
                break
            if tok.kind in (ATOM, QUOTED, BAD) or tok.is_special("."):
                words.append(self._advance())
            else:
                break
        return words

    def _mailbox_after(self, words: List[Token], in_group: bool) -> AddressCandidate:
        tok = self._peek()
        if tok is not None and tok.is_special("<"):
            self._advance()
            address = self._angle_addr()
            self._end_of_mailbox(in_group)
            return AddressCandidate(name=join_phrase(words), address=address)
        if tok is not None and tok.is_special("@"):
            local = self._local_from_words(words)
            self._advance()
            address = local + "@" + self._domain()
            self._end_of_mailbox(in_group)
            # An old-style "addr (Name)" comment stands in for a display name
            name = self._comments[-1] if self._comments else ""
            return AddressCandidate(name=name, address=address)
        if not words:
            raise AddressSyntaxError("expected a mailbox")
        raise AddressSyntaxError("missing '@' in address")

    def _end_of_mailbox(self, in_group: bool):
        tok = self._peek()
        if tok is None or tok.is_special(","):
            return
        if in_group and tok.is_special(";"):
            return
        raise AddressSyntaxError("unexpected {!r} after address".format(tok.value))

    def _angle_addr(self) -> str:
        if self._peek_special("@"):
            # obs-route: "@host1,@host2:" is dropped
            while self._peek() is not None and not self._peek_special(":"):
                if self._peek_special(">"):
                    raise AddressSyntaxError("unterminated route")
                self._advance()
            self._expect(":", "unterminated route")
        if self._peek_special(">"):
            raise AddressSyntaxError("empty address")
        local = self._local_part()
        self._expect("@", "missing '@' in address")
        domain = self._domain()
        self._expect(">", "missing '>' after address")
        return local + "@" + domain

    def _word(self) -> Optional[str]:
        tok = self._peek()
        if tok is None:
            return None
        if tok.kind == ATOM:
            self._advance()
            return tok.value
        if tok.kind == QUOTED:
            self._advance()
            return _quote_local(tok.value)
        return None

    def _local_part(self) -> str:
        word = self._word()
        if word is None:
            raise AddressSyntaxError("empty local part")
        parts = [word]
        while self._peek_special("."):
            self._advance()
            word = self._word()
            if word is None:
                raise AddressSyntaxError("local part has an empty label")
            parts.append(word)
        return ".".join(parts)

    @staticmethod
    def _local_from_words(words: List[Token]) -> str:
        if not words:
            raise AddressSyntaxError("empty local part")
        parts = []
        expect_word = True
        for tok in words:
            if expect_word:
                if tok.kind == ATOM:
                    parts.append(tok.value)
                elif tok.kind == QUOTED:
                    parts.append(_quote_local(tok.value))
                elif tok.is_special("."):
                    raise AddressSyntaxError("local part has an empty label")
                else:
                    raise AddressSyntaxError("invalid character in local part")
            elif not tok.is_special("."):
                raise AddressSyntaxError("invalid character in local part")
            expect_word = not expect_word
        if expect_word:
            raise AddressSyntaxError("local part has an empty label")
        return ".".join(parts)

    def _domain(self) -> str:
        tok = self._peek()
        if tok is not None and tok.kind == LITERAL:
            self._advance()
            return tok.value
        if tok is None or tok.kind != ATOM:
            raise AddressSyntaxError("missing domain")
        labels = [self._advance().value]
        while self._peek_special("."):
            self._advance()
            tok = self._peek()
            if tok is None or tok.kind != ATOM:
                raise AddressSyntaxError("domain has an empty label")
            labels.append(self._advance().value)
        return ".".join(labels)


class StrictLiteralStrategy:
    name = "strict"

    def split(self, text: str) -> List[AddressCandidate]:
        return _Parser(text).parse()
