import csv
import logging
import os

from .register import MultiItemRegister, Register
from .schema import Field, Schema

logger = logging.getLogger(__name__)


def split_list(value):
    return [v.strip() for v in (value or "").split(";") if v.strip()]


class Specification:
    """Register definitions read from a directory of CSV files.

    register.csv has the register, registry, text and fields columns, and
    optional custodian and index columns; fields and index are separated
    by semicolons. field.csv has the field, datatype, cardinality and text
    columns.
    """

    def __init__(self, path="specification"):
        self.register = {}
        self.register_names = []
        self.field = {}
        self.field_names = []
        self.load_register(path)
        self.load_field(path)

    def load_register(self, path):
        path = os.path.join(path, "register.csv")
        logger.debug(f"load {path}")
        with open(path, newline="") as f:
            for row in csv.DictReader(f):
                self.register_names.append(row["register"])
                self.register[row["register"]] = row

    def load_field(self, path):
        path = os.path.join(path, "field.csv")
        logger.debug(f"load {path}")
        with open(path, newline="") as f:
            for row in csv.DictReader(f):
                self.field_names.append(row["field"])
                self.field[row["field"]] = row

    def fields(self, register):
        fields = []
        for name in split_list(self.register[register]["fields"]):
            if name not in self.field:
                raise ValueError(f"unknown field {name} in register {register}")
            row = self.field[name]
            fields.append(
                Field(
                    name,
                    row.get("datatype") or "string",
                    row.get("text", ""),
                    row.get("cardinality") or "1",
                )
            )
        return fields

    def schema(self, register):
        row = self.register[register]
        return Schema(
            register, row.get("registry", ""), row.get("text", ""), self.fields(register)
        )

    def new_register(self, register, store=None, multi=False, issues=None):
        "an initialised register, with its custodian and indexes"
        row = self.register[register]
        cls = MultiItemRegister if multi else Register
        r = cls(store, issues=issues)
        r.init(
            register,
            row.get("registry", ""),
            row.get("text", ""),
            *self.fields(register),
        )
        if row.get("custodian"):
            r.custodian(row["custodian"])
        for attribute in split_list(row.get("index")):
            r.add_index(attribute)
        return r
