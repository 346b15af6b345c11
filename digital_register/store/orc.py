# a register store held by an external orc process
#
# streaming commands are written to a long-lived `orc batch-edit` process,
# one s-expression per line, and are applied by orc in the order written:
#
#   (ensure-entry "register" "user" "key" "{\"register\":\"key\"}")
#   (ensure-items "register" "user" "key" "{...}" "{...}")
#   (delete-untouched "register" "user")
#
# init, dump and digest run as separate orc processes and block until
# they exit.

import json
import logging
import subprocess
import threading

from ..model.entry import region as to_region
from .store import Store

logger = logging.getLogger(__name__)


def quote(value):
    "a double-quoted argument, escaped so a command always fits on one line"
    return json.dumps(str(value), ensure_ascii=False)


def log_command(command):
    logger.info("executing command: %s" % " ".join(command))


class Orc(Store):
    def __init__(self, store_path, command="orc"):
        self.store_path = str(store_path)
        self.command = command
        self.lock = threading.Lock()
        self.closed = False

        command = self._command("batch-edit")
        log_command(command)
        self.proc = subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
        )

    def _command(self, *args):
        return [self.command, "-S", self.store_path] + [str(arg) for arg in args]

    def _run(self, *args, **kwargs):
        # commands already written must reach orc before a one-shot task runs
        self.flush()
        command = self._command(*args)
        log_command(command)
        return subprocess.run(command, check=True, **kwargs)

    def flush(self):
        with self.lock:
            if not self.closed:
                self.proc.stdin.flush()

    def write(self, name, *args):
        line = "(%s)\n" % " ".join([name] + [quote(arg) for arg in args])
        with self.lock:
            if self.closed:
                raise ValueError("store channel is closed")
            logger.debug(line.rstrip("\n"))
            self.proc.stdin.write(line)

    def new_register(self, register):
        self._run("init", register)

    def ensure_entry(self, register, region, key, *items):
        self.write("ensure-entry", register, to_region(region).value, key, *items)

    def ensure_items(self, register, region, key, *items):
        self.write("ensure-items", register, to_region(region).value, key, *items)

    def delete_untouched(self, register, region):
        self.write("delete-untouched", register, to_region(region).value)

    def dump(self, register, path):
        with open(path, "w") as f:
            self._run("dump", register, stdout=f)

    def digest(self, path):
        self._run("digest", path)

    def close(self):
        with self.lock:
            if self.closed:
                return
            self.closed = True
            self.proc.stdin.close()
            returncode = self.proc.wait()

        if returncode:
            raise subprocess.CalledProcessError(returncode, self.proc.args)
