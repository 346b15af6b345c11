import subprocess

# used when building outside a git checkout
DEFAULT_VERSION = "0.0.0"


def get_version():
    try:
        return (
            subprocess.check_output(
                "git describe --tags --match [0-9]*".split(), stderr=subprocess.DEVNULL
            )
            .decode()
            .strip()
            .split("-", 1)[0]
        )
    except (subprocess.CalledProcessError, OSError):
        return DEFAULT_VERSION


def next_version():
    version = get_version().split(".")
    version[-1] = str(int(version[-1], 10) + 1)
    return ".".join(version)


if __name__ == "__main__":
    print(next_version())
