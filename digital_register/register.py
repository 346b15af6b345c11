# encapsulate the GOV.UK register model: a schema, an append-only log of
# entries and indexes over the items ingested in the current pass

import logging

from .datatype import check_item
from .index import Index
from .item import Item
from .log import IssueLog, entry_date
from .model.entry import Entry, Region, region as to_region
from .rsf import check_value, save_rsf, write_rsf
from .schema import Schema
from .utils.hash import hash_value

logger = logging.getLogger(__name__)


class Register:
    """A named register of items, built in a single pass.

    Each entry appended is also sent to the store, if there is one, and
    finish() retires everything in the store the pass did not touch, so
    the register converges on exactly what was seen in this run.
    """

    # whether two distinct items sharing a key is an anomaly
    unique_keys = True

    def __init__(self, store=None, issues=None):
        self.store = store
        self.issues = issues
        self.schema = None
        self.name = None
        self.index = Index()
        self.entries = []
        self.payloads = {}
        self.records = []
        self.finished = False

    def init(self, name, organisation, text, *fields):
        if self.schema is not None:
            raise ValueError("register %s has already been initialised" % self.name)

        schema = Schema(name, organisation, text, fields)
        logger.info("initialising register %s" % name)
        if self.store is not None:
            self.store.new_register(name)

        self.schema = schema
        self.name = name
        if self.issues is None:
            self.issues = IssueLog(register=name)

        # keys are written as text, so 1 and "1" are the same key
        self.index.add_index(name, self.records, normalise=str)

        self.append_entry(Region.SYSTEM, "name", {"name": name})
        self.append_entry(Region.SYSTEM, "register:%s" % name, schema.item())
        for field in schema.fields:
            self.append_entry(Region.SYSTEM, "field:%s" % field.name, field.item())
        return self

    def custodian(self, name):
        return self.append_entry(Region.SYSTEM, "custodian", {"custodian": name})

    def add_index(self, attribute):
        self.index.add_index(attribute, self.records)

    def find(self, attribute, value):
        return self.index.find(attribute, value)

    def items(self):
        return self.index.items(self.name)

    def keys(self):
        return self.index.keys(self.name)

    def _check_append(self, region, key, item):
        region = to_region(region)
        if key is None:
            raise ValueError("key cannot be nil")
        check_value("key", str(key))
        if self.schema is None:
            raise ValueError("register has not been initialised")
        if self.finished:
            raise ValueError("register %s has been finished" % self.name)

        if region == Region.SYSTEM:
            return region, Item(item)

        item = Item(item, fields=self.schema.fields)
        if key != item.get(self.schema.key):
            raise ValueError(
                "incorrect key %r for %s item %r"
                % (key, self.name, item.get(self.schema.key))
            )
        check_item(self.schema, item, self.issues, key=str(key))
        return region, item

    def _add(self, item):
        self.records.append(item)
        self.index.add(item)

    def _write(self, region, key, items, many=False):
        key = str(key)
        packed = [item.pack().decode("utf-8") for item in items]
        digests = [hash_value(data) for data in packed]
        for digest, data in zip(digests, packed):
            self.payloads[digest] = data

        entry = Entry(region, key, entry_date(), digests)
        self.entries.append(entry)
        logger.debug("%s %s %s %s" % (self.name, region.value, key, entry.item_hash))

        if self.store is not None:
            if many:
                self.store.ensure_items(self.name, region, key, *packed)
            else:
                self.store.ensure_entry(self.name, region, key, *packed)
        return entry

    def append_entry(self, region, key, item):
        region, item = self._check_append(region, key, item)
        if region == Region.USER:
            self._add(item)
        return self._write(region, key, [item])

    def check(self):
        "reports keys shared by distinct items, returning the colliding keys"
        collisions = self.index.collisions(self.name)
        for key in collisions:
            self.issues.log_issue(
                "duplicate-key",
                key,
                "%d items share this key" % len(self.find(self.name, key)),
                key=key,
            )
        return collisions

    def finish(self):
        """Retires every entry in the store not touched by this pass.

        Returns the retired keys by region where the store reports them.
        Calling finish again issues the same retirement without
        re-checking the items.
        """
        if self.schema is None:
            raise ValueError("register has not been initialised")

        if not self.finished:
            if self.unique_keys:
                self.check()
            self.finished = True
            logger.info(
                "finished register %s with %d items" % (self.name, len(self.items()))
            )

        retired = {}
        if self.store is not None:
            for region in Region:
                retired[region] = self.store.delete_untouched(self.name, region)
        return retired

    def close(self):
        if not self.finished:
            self.finish()

    def write_rsf(self, f):
        write_rsf(self.entries, self.payloads, f)

    def to_rsf(self, path):
        save_rsf(self.entries, self.payloads, path)

    def dump(self, path):
        if self.store is None:
            raise ValueError("register %s has no store to dump" % self.name)
        self.store.dump(self.name, path)


class MultiItemRegister(Register):
    """A register where a key may hold several items.

    User items are only indexed as they arrive; finish() writes one entry
    for each key carrying all of the items seen for it, in the order they
    were appended.
    """

    unique_keys = False

    def append_entry(self, region, key, item):
        region, item = self._check_append(region, key, item)
        if region == Region.SYSTEM:
            return self._write(region, key, [item])
        self._add(item)

    def finish(self):
        if self.schema is not None and not self.finished:
            for key in self.keys():
                self._write(Region.USER, key, self.find(self.name, key), many=True)
        return super().finish()
