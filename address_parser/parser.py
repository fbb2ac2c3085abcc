"""Entry point: pick a splitting strategy, validate, decode display names."""

from typing import Callable, Dict, List, Optional, Protocol

from address_parser.encoding_utils import decode_display_name
from address_parser.models import AddressCandidate, AddressEntry
from address_parser.native import NativeStrategy
from address_parser.strict import StrictLiteralStrategy
from address_parser.validation import Pattern, get_validator, validate_address

NATIVE = "native"
STRICT = "strict"


class AddressSplitStrategy(Protocol):
    name: str

    def split(self, text: str) -> List[AddressCandidate]: ...


class UnknownStrategyError(ValueError):
    """Raised when a strategy name is not registered."""

    pass


STRATEGIES: Dict[str, Callable[[], AddressSplitStrategy]] = {
    NATIVE: NativeStrategy,
    STRICT: StrictLiteralStrategy,
}


def available_strategies() -> List[str]:
    return list(STRATEGIES)


def get_strategy(name: str) -> AddressSplitStrategy:
    try:
        factory = STRATEGIES[name]
    except KeyError:
        raise UnknownStrategyError(
            "Unknown strategy {!r}, available: {}".format(name, ", ".join(STRATEGIES))
        ) from None
    return factory()


def _check_input(text):
    if not isinstance(text, str):
        raise TypeError(
            "address list must be a str, not {}".format(type(text).__name__)
        )


def inspect_addresses(
    text: str,
    use_strict: bool = False,
    decoder: Optional[Callable[[str], str]] = decode_display_name,
    pattern: Pattern = "default",
) -> List[AddressCandidate]:
    """Return every candidate found in ``text``, valid or not.

    Invalid candidates carry an ``error`` description; the names of valid
    ones are decoded with ``decoder`` when one is given.
    """
    _check_input(text)
    validator = get_validator(pattern)
    strategy = get_strategy(STRICT if use_strict else NATIVE)

    results = []
    for candidate in strategy.split(text):
        if candidate.error is not None:
            results.append(candidate)
            continue
        if not validate_address(candidate.address, validator):
            results.append(
                AddressCandidate(candidate.name, candidate.address, "invalid address syntax")
            )
            continue
        name = candidate.name
        if decoder is not None and name:
            name = decoder(name)
        results.append(AddressCandidate(name, candidate.address))
    return results


def parse_addresses(
    text: str,
    use_strict: bool = False,
    decoder: Optional[Callable[[str], str]] = decode_display_name,
    pattern: Pattern = "default",
) -> List[AddressEntry]:
    """Split an address-list header value into ``AddressEntry`` items.

    Malformed addresses are dropped. Pass ``decoder=None`` to keep
    RFC 2047 encoded display names as they appear in the input.
    """
    return [
        c.to_entry()
        for c in inspect_addresses(text, use_strict=use_strict, decoder=decoder, pattern=pattern)
        if c.is_valid
    ]
