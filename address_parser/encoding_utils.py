import base64
import binascii
import logging
import re
from email.errors import HeaderParseError
from email.header import Header, decode_header
from typing import Optional

logger = logging.getLogger(__name__)

_ENCODED_WORD_RE = re.compile(
    r"=\?(?P<charset>[^?\s]+)\?(?P<encoding>[BbQq])\?(?P<payload>[^?\s]*)\?="
)


def has_encoded_words(value: Optional[str]) -> bool:
    return bool(value) and _ENCODED_WORD_RE.search(value) is not None


def _check_base64_payloads(raw: str):
    """Raise binascii.Error for any B-encoded word that is not valid base64."""
    for match in _ENCODED_WORD_RE.finditer(raw):
        if match.group("encoding") in "Bb":
            payload = match.group("payload")
            base64.b64decode(payload + "=" * (-len(payload) % 4), validate=True)


def decode_display_name(raw: Optional[str]) -> str:
    """Decode RFC 2047 encoded-words in a display name to a Unicode string.

    Names without encoded-words are returned as they are. An unknown charset
    or a corrupt payload leaves the raw name in place.
    """
    if not raw:
        return ""
    if not has_encoded_words(raw):
        return raw
    try:
        _check_base64_payloads(raw)
        parts = decode_header(raw)
        decoded_parts = []
        for data, charset in parts:
            if isinstance(data, bytes):
                # Text outside encoded-words comes back as raw-unicode-escape bytes
                if charset is None:
                    decoded_parts.append(data.decode("raw-unicode-escape"))
                else:
                    decoded_parts.append(data.decode(charset, errors="replace"))
            else:
                decoded_parts.append(data)
    except (HeaderParseError, LookupError, UnicodeDecodeError, binascii.Error) as exc:
        logger.debug("Leaving display name undecoded (%s): %r", exc, raw)
        return raw
    decoded = "".join(decoded_parts).strip()
    if not decoded:
        logger.debug("Encoded display name decoded to nothing: %r", raw)
        return raw
    return decoded


def encode_display_name(name: str, charset: str = "utf-8") -> str:
    """Encode a non-ASCII display name as RFC 2047 encoded-words."""
    if not name or name.isascii():
        return name
    return Header(name, charset).encode(maxlinelen=0)
