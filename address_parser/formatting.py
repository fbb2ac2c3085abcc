"""Turn (name, address) pairs back into header text."""

from typing import Iterable, Union

from address_parser.encoding_utils import encode_display_name
from address_parser.models import AddressEntry

# Characters that force a display name into a quoted-string
_NAME_SPECIALS = set('()<>[]:;@\\,."')


def quote_display_name(name: str) -> str:
    framed = len(name) >= 2 and name[0] == name[-1] == "'"
    if not framed and not any(ch in _NAME_SPECIALS for ch in name):
        return name
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_address(name: str, address: str, encode: bool = False) -> str:
    """Build ``Name <address>``, or the bare address when there is no name."""
    name = (name or "").strip()
    if not name:
        return address
    if encode and not name.isascii():
        return "{} <{}>".format(encode_display_name(name), address)
    return "{} <{}>".format(quote_display_name(name), address)


def format_address_list(
    entries: Iterable[Union[AddressEntry, tuple]], encode: bool = False
) -> str:
    parts = []
    for entry in entries:
        if isinstance(entry, AddressEntry):
            name, address = entry.name, entry.address
        else:
            name, address = entry
        parts.append(format_address(name, address, encode=encode))
    return ", ".join(parts)
