"""Mailbox syntax checks shared by every parsing strategy."""

import re
from typing import Callable, Union

# RFC 5322 atext minus the symbols we refuse unquoted: { } | ^
_ATEXT = r"[A-Za-z0-9!#$%&'*+/=?_`~-]"
_DOT_ATOM = r"{0}+(?:\.{0}+)*".format(_ATEXT)
_QUOTED_LOCAL = r'"(?:[^"\\\x00-\x1f\x7f]|\\[^\r\n])*"'
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
_HOSTNAME = r"{0}(?:\.{0})*".format(_LABEL)
_IPV4 = r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)(?:\.(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)){3}"
_DOMAIN_LITERAL = r"\[(?:{0}|IPv6:[0-9A-Fa-f:.]+)\]".format(_IPV4)

_DEFAULT_RE = re.compile(
    r"(?P<local>{0}|{1})@(?P<domain>{2}|{3})".format(
        _DOT_ATOM, _QUOTED_LOCAL, _HOSTNAME, _DOMAIN_LITERAL
    )
)

_HTML5_RE = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

MAX_LOCAL_LENGTH = 64
MAX_ADDRESS_LENGTH = 254

Pattern = Union[str, Callable[[str], bool]]


def _validate_default(address: str) -> bool:
    match = _DEFAULT_RE.fullmatch(address)
    if match is None:
        return False
    if len(match.group("local")) > MAX_LOCAL_LENGTH:
        return False
    return len(address) <= MAX_ADDRESS_LENGTH


def _validate_html5(address: str) -> bool:
    return _HTML5_RE.fullmatch(address) is not None


def _validate_noregex(address: str) -> bool:
    # Just an @ somewhere that is neither the first nor the last character
    at = address.find("@")
    return 1 <= at < len(address) - 1


VALIDATORS = {
    "default": _validate_default,
    "html5": _validate_html5,
    "noregex": _validate_noregex,
}


def get_validator(pattern: Pattern = "default") -> Callable[[str], bool]:
    """Resolve a pattern name (or a callable) to a validator function."""
    if callable(pattern):
        return pattern
    try:
        return VALIDATORS[pattern]
    except KeyError:
        raise ValueError(
            "Unknown validation pattern {!r}, expected one of: {}".format(
                pattern, ", ".join(sorted(VALIDATORS))
            )
        ) from None


def validate_address(address, pattern: Pattern = "default") -> bool:
    """Check that ``address`` is a syntactically valid ``local@domain`` mailbox.

    Non-string values and anything containing a line break are never valid.
    """
    validator = get_validator(pattern)
    if not isinstance(address, str) or not address:
        return False
    if "\n" in address or "\r" in address:
        return False
    return bool(validator(address))
