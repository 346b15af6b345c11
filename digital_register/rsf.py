# register serialisation format (RSF), a replayable log of a register
#
#   assert-root-hash	sha-256:<digest of the empty string>
#   add-item	<canonical JSON item>
#   append-entry	<region>	<key>	<timestamp>	<item digest(s)>
#
# add-item and append-entry lines repeat, the items of each entry
# preceding the entry which names them.

import json
import logging

from .model.entry import Entry, Region
from .utils.hash import EMPTY_ROOT_HASH, hash_value, pack

logger = logging.getLogger(__name__)

ASSERT_ROOT_HASH = "assert-root-hash"
ADD_ITEM = "add-item"
APPEND_ENTRY = "append-entry"


def check_value(name, value):
    if "\t" in value or "\n" in value or "\r" in value:
        raise ValueError("%s %r cannot contain a tab or newline" % (name, value))
    return value


def write_rsf(entries, items, f):
    """Writes entries to an RSF stream.

    items maps each digest named by an entry to its canonical item.
    """
    f.write("%s\t%s\n" % (ASSERT_ROOT_HASH, EMPTY_ROOT_HASH))
    for entry in entries:
        for digest in entry.digests:
            f.write("%s\t%s\n" % (ADD_ITEM, check_value("item", items[digest])))
        f.write(
            "%s\t%s\t%s\t%s\t%s\n"
            % (
                APPEND_ENTRY,
                entry.region.value,
                check_value("key", entry.key),
                entry.timestamp,
                entry.item_hash,
            )
        )


def save_rsf(entries, items, path):
    logger.info("saving %s" % path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        write_rsf(entries, items, f)


def read_rsf(f):
    "yields the (command, value) pairs of an RSF stream"
    for line_number, line in enumerate(f, start=1):
        line = line.rstrip("\r\n")
        if not line:
            continue

        command, _, rest = line.partition("\t")
        if command == ASSERT_ROOT_HASH:
            yield command, rest
        elif command == ADD_ITEM:
            yield command, rest
        elif command == APPEND_ENTRY:
            parts = rest.split("\t")
            if len(parts) != 4:
                raise ValueError(
                    "line %d: expected 4 values for %s" % (line_number, command)
                )
            region, key, timestamp, item_hash = parts
            yield command, Entry(region, key, timestamp, item_hash.split(";"))
        else:
            raise ValueError("line %d: unknown command '%s'" % (line_number, command))


def replay(f):
    """Rebuilds the entries and items of an RSF stream.

    Returns the ordered list of entries and a dict of items by digest.
    """
    entries = []
    items = {}
    for command, value in read_rsf(f):
        if command == ADD_ITEM:
            items[hash_value(value)] = value
        elif command == APPEND_ENTRY:
            for digest in value.digests:
                if digest not in items:
                    raise ValueError(
                        "entry %s names item %s which has not been added"
                        % (value.key, digest)
                    )
            entries.append(value)
    return entries, items


def load_rsf(path):
    with open(path, encoding="utf-8", newline="") as f:
        return replay(f)


def verify(f):
    "returns a list of problems found in an RSF stream, empty when it is sound"
    problems = []
    items = set()
    root_hash = None
    try:
        for command, value in read_rsf(f):
            if command == ASSERT_ROOT_HASH:
                if root_hash is not None:
                    problems.append("root hash asserted more than once")
                elif value != EMPTY_ROOT_HASH:
                    problems.append("unexpected root hash %s" % value)
                root_hash = value
            elif root_hash is None:
                problems.append("%s before the root hash" % command)
                root_hash = ""

            if command == ADD_ITEM:
                try:
                    canonical = pack(json.loads(value)).decode("utf-8")
                except (ValueError, TypeError):
                    problems.append("invalid item %s" % value)
                    continue
                if canonical != value:
                    problems.append("item is not canonical: %s" % value)
                items.add(hash_value(value))
            elif command == APPEND_ENTRY:
                for digest in value.digests:
                    if digest not in items:
                        problems.append(
                            "entry %s %s names missing item %s"
                            % (value.region.value, value.key, digest)
                        )
    except ValueError as e:
        problems.append(str(e))

    if root_hash is None:
        problems.append("missing root hash")
    return problems


def register_name(entries, items):
    "the name declared by the system entries of a register log"
    for entry in entries:
        if entry.region == Region.SYSTEM and entry.key == "name":
            return json.loads(items[entry.digests[0]])["name"]
    return None


def current_entries(entries, region=None):
    """The latest entry for each key, in the order the keys were last written.

    Timestamps are only precise to the second, so the position in the log
    decides which of two entries for a key is the latest.
    """
    current = {}
    for entry in entries:
        if region and entry.region != region:
            continue
        current.pop((entry.region, entry.key), None)
        current[(entry.region, entry.key)] = entry
    return list(current.values())
