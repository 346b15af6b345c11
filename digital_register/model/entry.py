from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Region(str, Enum):
    SYSTEM = "system"
    USER = "user"

    def __str__(self):
        return self.value


def region(value):
    if value is None:
        raise ValueError("region cannot be nil")
    try:
        return Region(value)
    except ValueError:
        raise ValueError("unknown region '%s'" % value) from None


@dataclass(frozen=True)
class Entry:
    "an ordered entry in a register log"

    region: Region
    key: str
    timestamp: str
    digests: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "region", region(self.region))
        object.__setattr__(self, "digests", tuple(self.digests))

    @property
    def item_hash(self):
        "the digests of the entry's items as written to an RSF line"
        return ";".join(self.digests)

    @property
    def triple(self):
        return (self.region, self.key, self.item_hash)
