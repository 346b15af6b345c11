# checks on the values held by register fields
#
# a value which doesn't match its field's datatype is recorded as an issue
# rather than rejected, so the item is still ingested for inspection

import re

import validators

from .item import curie_re

datetime_re = re.compile(r"^\d{4}(-\d{2}(-\d{2}(T\d{2}(:\d{2}(:\d{2})?)?Z?)?)?)?$")
integer_re = re.compile(r"^-?\d+$")


class DataType:
    name = "string"
    issue_type = None

    def valid(self, value):
        return True

    def check(self, value, issues, fieldname, key=""):
        if self.valid(value):
            return True
        issues.log_issue(
            self.issue_type,
            value,
            f"{fieldname} must be a valid {self.name}",
            key=key,
        )
        return False


class IntegerDataType(DataType):
    name = "integer"
    issue_type = "invalid integer"

    def valid(self, value):
        if isinstance(value, bool):
            return False
        return isinstance(value, int) or bool(integer_re.match(str(value)))


class DateTimeDataType(DataType):
    name = "datetime"
    issue_type = "invalid datetime"

    def valid(self, value):
        return bool(datetime_re.match(str(value)))


class URIDataType(DataType):
    name = "url"
    issue_type = "invalid URI"

    def valid(self, value):
        return bool(validators.url(str(value)))


class CurieDataType(DataType):
    name = "curie"
    issue_type = "invalid curie"

    def valid(self, value):
        return bool(curie_re.match(str(value)))


def datatype_factory(datatype_name):
    typemap = {
        "integer": IntegerDataType,
        "datetime": DateTimeDataType,
        "url": URIDataType,
        "curie": CurieDataType,
    }
    return typemap.get(datatype_name, DataType)()


def check_item(schema, item, issues, key=""):
    "records an issue for each value in the item not matching its datatype"
    valid = True
    for field in schema.fields:
        value = item.get(field.name)
        if value is None or value == "":
            continue
        datatype = datatype_factory(field.datatype)
        values = value if field.many else [value]
        for v in values:
            if not datatype.check(v, issues, field.name, key=key):
                valid = False
    return valid
