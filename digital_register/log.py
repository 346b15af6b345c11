import csv
import logging
import os
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def entry_date():
    return datetime.now(timezone.utc).isoformat()[:19] + "Z"


class Log:
    fieldnames = []

    def __init__(self, register=""):
        self.register = register
        self.rows = []

    def write(self, f):
        writer = csv.DictWriter(f, self.fieldnames)
        writer.writeheader()
        for row in self.rows:
            writer.writerow(row)

    def save(self, path=None, f=None):
        if f:
            return self.write(f)

        if os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)
        logger.debug("saving %s" % path)
        with open(path, "w", newline="") as f:
            self.write(f)


class IssueLog(Log):
    "data-integrity anomalies found while building a register"

    fieldnames = [
        "register",
        "region",
        "key",
        "issue-type",
        "value",
        "message",
    ]

    def log_issue(self, issue_type, value, message=None, key="", region="user"):
        logger.warning(
            "%s: %s %s%s"
            % (self.register, issue_type, value, f" ({message})" if message else "")
        )
        self.rows.append(
            {
                "register": self.register,
                "region": region,
                "key": key,
                "issue-type": issue_type,
                "value": value,
                "message": message,
            }
        )

    def issue_types(self):
        return [row["issue-type"] for row in self.rows]
