# find items already ingested in this pass, before falling back to
# anything more expensive

import logging

from .index import index_values
from .item import curie

logger = logging.getLogger(__name__)


class ResolutionError(LookupError):
    def __init__(self, register, description):
        self.register = register
        self.description = description
        super().__init__("%s not found in %s" % (description, register))


def matches(value, criterion):
    "a field of cardinality n matches when it contains every value sought"
    if isinstance(value, (list, tuple)):
        sought = index_values(criterion)
        return bool(sought) and all(v in value for v in sought)
    return value == criterion


def resolve(register, criteria=None, **kwargs):
    """Returns the first item in the register matching every criterion.

    Criteria may be passed as a dict, for field names which are not valid
    keyword arguments, or as keyword arguments. An indexed criterion is
    looked up through the register's index, which gives the same result
    as searching every item.
    """
    criteria = dict(criteria or {}, **kwargs)
    if not criteria:
        raise ValueError("no criteria to resolve an item from %s" % register.name)

    candidates = None
    for attribute, value in criteria.items():
        values = index_values(value)
        if attribute in register.index and values:
            candidates = register.find(attribute, values[0])
            break
    if candidates is None:
        candidates = register.items()

    for item in candidates:
        if all(matches(item.get(a), value) for a, value in criteria.items()):
            return item

    raise ResolutionError(register.name, criteria)


def resolve_references(register, descriptions, attribute=None, issues=None):
    """Resolves descriptions to curies of items in the register.

    Each description is a dict of criteria, or a value of the given
    attribute. Descriptions which cannot be resolved are logged, and
    recorded as issues when an issue log is given, but do not stop the
    remaining descriptions being resolved.
    """
    curies = []
    for description in descriptions:
        criteria = description if attribute is None else {attribute: description}
        try:
            item = resolve(register, criteria)
        except ResolutionError as e:
            if issues is not None:
                issues.log_issue(
                    "missing-reference",
                    description,
                    "not found in %s" % register.name,
                )
            else:
                logger.warning(str(e))
            continue
        curies.append(curie(register.name, item[register.name]))
    return curies
