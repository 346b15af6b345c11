import csv
import json
import logging
import os

from .model.entry import Region
from .rsf import current_entries, load_rsf, register_name, verify

logger = logging.getLogger(__name__)


def csv_writer(f, fieldnames):
    writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    return writer


def open_output(path):
    if os.path.dirname(path):
        os.makedirs(os.path.dirname(path), exist_ok=True)
    logger.info(path)
    return open(path, "w", newline="")


def rsf_verify(input_path):
    with open(input_path, encoding="utf-8", newline="") as f:
        problems = verify(f)
    for problem in problems:
        logger.error("%s: %s" % (input_path, problem))
    return problems


def rsf_entries(input_path, output_path):
    entries, _ = load_rsf(input_path)
    with open_output(output_path) as f:
        writer = csv_writer(f, ["region", "key", "entry-date", "item-hash"])
        for entry in entries:
            writer.writerow(
                {
                    "region": entry.region.value,
                    "key": entry.key,
                    "entry-date": entry.timestamp,
                    "item-hash": entry.item_hash,
                }
            )


def format_value(value):
    if isinstance(value, (list, tuple)):
        return ";".join(str(v) for v in value)
    return value


def rsf_items(input_path, output_path, specification=None):
    "save the current user items of an RSF file as CSV"
    entries, items = load_rsf(input_path)
    name = register_name(entries, items)

    rows = []
    for entry in current_entries(entries, Region.USER):
        for digest in entry.digests:
            rows.append(json.loads(items[digest]))

    if specification and name in specification.register:
        fieldnames = specification.schema(name).fieldnames
    else:
        fieldnames = sorted(set(field for row in rows for field in row))
        if name in fieldnames:
            fieldnames.remove(name)
            fieldnames.insert(0, name)

    with open_output(output_path) as f:
        writer = csv_writer(f, fieldnames)
        for row in rows:
            writer.writerow({k: format_value(v) for k, v in row.items()})
