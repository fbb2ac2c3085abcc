from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class AddressEntry:
    name: str
    address: str

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class AddressCandidate:
    """One top-level group as a strategy saw it, before filtering.

    ``error`` is None when the candidate is a valid mailbox.
    """

    name: str
    address: str
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def to_entry(self) -> AddressEntry:
        return AddressEntry(name=self.name, address=self.address)

    def to_dict(self):
        d = asdict(self)
        d["valid"] = self.is_valid
        return d
