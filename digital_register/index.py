import logging

logger = logging.getLogger(__name__)


def index_values(value):
    "the values an item is indexed under for an attribute"
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        values = []
        for v in value:
            if v is not None and v not in values:
                values.append(v)
        return values
    return [value]


class Index:
    #
    #  value -> items buckets for each tracked attribute
    #
    def __init__(self):
        self.indexes = {}
        self.normalisers = {}

    def __contains__(self, attribute):
        return attribute in self.indexes

    def add_index(self, attribute, items=(), normalise=None):
        """Starts tracking an attribute, indexing any items already held.

        When normalise is given, values are indexed and looked up by
        normalise(value), so values with the same normal form share a bucket.
        """
        if attribute in self.indexes:
            return self.indexes[attribute]

        logger.debug("adding index %s" % attribute)
        self.indexes[attribute] = {}
        if normalise is not None:
            self.normalisers[attribute] = normalise
        for item in items:
            self._add(attribute, item)
        return self.indexes[attribute]

    def _normalise(self, attribute, value):
        normalise = self.normalisers.get(attribute)
        return value if normalise is None else normalise(value)

    def _add(self, attribute, item):
        for value in index_values(item.get(attribute)):
            value = self._normalise(attribute, value)
            self.indexes[attribute].setdefault(value, [])
            self.indexes[attribute][value].append(item)

    def add(self, item):
        for attribute in self.indexes:
            self._add(attribute, item)

    def find(self, attribute, value):
        if attribute not in self.indexes:
            return []
        try:
            value = self._normalise(attribute, value)
            return list(self.indexes[attribute].get(value, []))
        except TypeError:
            # unhashable values are never indexed
            return []

    def keys(self, attribute):
        return list(self.indexes.get(attribute, {}).keys())

    def items(self, attribute):
        "all indexed items for an attribute, flattened in bucket order"
        items = []
        for bucket in self.indexes.get(attribute, {}).values():
            items.extend(bucket)
        return items

    def collisions(self, attribute):
        """Returns the values held by more than one distinct item.

        Items are compared by content digest, so ingesting the same item
        twice is not a collision.
        """
        collisions = []
        for value, bucket in self.indexes.get(attribute, {}).items():
            digests = set(item.hash() for item in bucket)
            if len(digests) > 1:
                collisions.append(value)
        return collisions
