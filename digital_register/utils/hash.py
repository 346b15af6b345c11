""" functions used to generate the content digests written to a register log"""

import hashlib

from canonicaljson import encode_canonical_json

# RSF names the algorithm alongside the hex digest
HASH_ALGORITHM = "sha-256"


def hash_value(data) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return "%s:%s" % (HASH_ALGORITHM, hashlib.sha256(data).hexdigest())


def pack(data) -> bytes:
    """Returns the canonical serialisation of an item.

    Keys are sorted and insignificant whitespace removed, so two items
    holding the same values serialise to the same bytes whatever order
    their fields were added in.
    """
    return encode_canonical_json(dict(data))


def hash_item(data) -> str:
    return hash_value(pack(data))


# the root of every register log, asserted before any item exists
EMPTY_ROOT_HASH = hash_value("")
