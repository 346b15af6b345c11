# the description of a register: its name, custodian organisation and fields

from dataclasses import dataclass, field as dataclass_field
from typing import Tuple

# datatypes recognised by the register model
DATATYPES = [
    "curie",
    "datetime",
    "decimal",
    "hash",
    "integer",
    "name",
    "period",
    "point",
    "polygon",
    "string",
    "text",
    "url",
]

CARDINALITIES = ["1", "n"]


@dataclass(frozen=True)
class Field:
    "information about a field"

    name: str
    datatype: str = "string"
    text: str = ""
    cardinality: str = "1"

    def __post_init__(self):
        if not self.name:
            raise ValueError("field name cannot be empty")

        datatype = str(self.datatype).lower()
        if datatype not in DATATYPES:
            raise ValueError(
                "unknown datatype '%s' for field %s" % (self.datatype, self.name)
            )
        object.__setattr__(self, "datatype", datatype)

        cardinality = str(self.cardinality or "1")
        if cardinality not in CARDINALITIES:
            raise ValueError(
                "unknown cardinality '%s' for field %s"
                % (self.cardinality, self.name)
            )
        object.__setattr__(self, "cardinality", cardinality)

    @property
    def many(self):
        return self.cardinality == "n"

    def item(self):
        "the system item declaring this field"
        return {
            "field": self.name,
            "cardinality": self.cardinality,
            "datatype": self.datatype,
            "text": self.text,
        }


@dataclass(frozen=True)
class Schema:
    name: str
    organisation: str
    text: str
    fields: Tuple[Field, ...] = dataclass_field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise ValueError("register name cannot be empty")

        fields = tuple(self.fields)
        if not fields:
            raise ValueError("register %s must have at least one field" % self.name)

        seen = set()
        for f in fields:
            if f.name in seen:
                raise ValueError(
                    "duplicate field %s in register %s" % (f.name, self.name)
                )
            seen.add(f.name)

        if self.name not in seen:
            raise ValueError(
                "register %s has no primary key field named %s"
                % (self.name, self.name)
            )

        object.__setattr__(self, "fields", fields)

        if self.field(self.name).many:
            raise ValueError(
                "primary key field %s must have a cardinality of 1" % self.name
            )

    @property
    def key(self):
        "the primary key field shares the register's name"
        return self.name

    @property
    def fieldnames(self):
        return [f.name for f in self.fields]

    def field(self, name):
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def item(self):
        "the system item declaring this register"
        return {
            "fields": self.fieldnames,
            "register": self.name,
            "registry": self.organisation,
            "text": self.text,
        }
