# the records held by a register, with curie references between registers

import json
import re
from collections import UserDict

from .utils.hash import hash_item, pack

curie_re = re.compile(r"^([a-z0-9][a-z0-9-]*):(.+)$")


def curie(register, key):
    "a reference to the item with the given key in another register"
    return "%s:%s" % (register, key)


def parse_curie(value):
    m = curie_re.match(str(value))
    if not m:
        raise ValueError("invalid curie '%s'" % value)
    return m.groups()


SCALARS = (str, int, float, bool)


def check_value(name, value):
    "a value is a scalar, or a flat list of scalars"
    if value is None or isinstance(value, SCALARS):
        return
    if isinstance(value, (list, tuple)):
        for v in value:
            if v is not None and not isinstance(v, SCALARS):
                raise ValueError("field %s holds a nested value %r" % (name, v))
        return
    raise ValueError("field %s holds an unsupported value %r" % (name, value))


class Item(UserDict):
    """A register record.

    When created with a list of fields the item only accepts values for
    those fields, so a misspelt field name fails where the item is built
    rather than when the register is exported. A field with a cardinality
    of n holds a list of values, any other field holds a single value.
    """

    def __init__(self, data=None, fields=None, **kwargs):
        self.fields = None
        if fields is not None:
            self.fields = {field.name: field for field in fields}
        super().__init__(data, **kwargs)

    def __setitem__(self, name, value):
        check_value(name, value)
        if self.fields is not None:
            if name not in self.fields:
                raise KeyError("unknown field '%s'" % name)

            many = isinstance(value, (list, tuple))
            if self.fields[name].many and not many:
                raise ValueError("field %s must hold a list of values" % name)
            if many and not self.fields[name].many:
                raise ValueError("field %s must hold a single value" % name)
        self.data[name] = value

    def pack(self):
        return pack(self.data)

    def unpack(self, data):
        self.data = json.loads(data)
        return self

    def hash(self):
        return hash_item(self.data)
