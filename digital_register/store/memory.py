# a register store held in memory, applying the store commands in process

import logging

from ..log import entry_date
from ..model.entry import Entry, Region, region as to_region
from ..rsf import load_rsf, register_name, save_rsf
from ..utils.hash import hash_value
from .store import Store

logger = logging.getLogger(__name__)


class MemoryStore(Store):
    def __init__(self):
        self.entries = {}
        self.items = {}
        self.records = {}
        self.retired = {}
        self.touched = set()
        self.closed = False

    def _check(self, register):
        if self.closed:
            raise ValueError("store channel is closed")
        if register not in self.entries:
            raise ValueError("register %s has not been initialised" % register)

    def reopen(self):
        "start a new channel, forgetting which entries were touched"
        self.touched = set()
        self.closed = False

    def new_register(self, register):
        if self.closed:
            raise ValueError("store channel is closed")
        logger.info("init %s" % register)
        self.entries.setdefault(register, [])

    def ensure_entry(self, register, region, key, *items):
        self._check(register)
        region = to_region(region)
        key = str(key)

        digests = tuple(hash_value(item) for item in items)
        for digest, item in zip(digests, items):
            self.items[digest] = item

        self.touched.add((register, region, key))
        records = self.records.setdefault((register, region), {})
        current = records.get(key)
        if current and current.digests == digests:
            logger.debug("%s %s %s unchanged" % (register, region.value, key))
            return current

        entry = Entry(region, key, entry_date(), digests)
        self.entries[register].append(entry)
        records[key] = entry
        self.retired.get((register, region), {}).pop(key, None)
        return entry

    def ensure_items(self, register, region, key, *items):
        return self.ensure_entry(register, region, key, *items)

    def delete_untouched(self, register, region):
        self._check(register)
        region = to_region(region)

        records = self.records.get((register, region), {})
        retired = self.retired.setdefault((register, region), {})
        keys = []
        for key in list(records):
            if (register, region, key) not in self.touched:
                retired[key] = records.pop(key)
                keys.append(key)

        if keys:
            logger.info(
                "retired %d %s entries from %s" % (len(keys), region.value, register)
            )
        return keys

    def current(self, register, region=Region.USER):
        "the current entry for each key in a region"
        return dict(self.records.get((register, to_region(region)), {}))

    def current_entries(self, register):
        current = set()
        for region in Region:
            entries = self.current(register, region).values()
            current.update(id(entry) for entry in entries)
        return [entry for entry in self.entries[register] if id(entry) in current]

    def dump(self, register, path):
        if register not in self.entries:
            raise ValueError("register %s has not been initialised" % register)
        save_rsf(self.current_entries(register), self.items, path)

    def digest(self, path):
        entries, items = load_rsf(path)
        register = register_name(entries, items)
        if not register:
            raise ValueError("%s does not declare a register name" % path)

        self.new_register(register)
        for entry in entries:
            self.ensure_entry(
                register,
                entry.region,
                entry.key,
                *[items[digest] for digest in entry.digests],
            )
        return register

    def close(self):
        self.closed = True
