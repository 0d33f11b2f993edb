"""Default system-info pairs appended to every CLI bug report."""

import platform
import sys

# sys.platform prefix -> name used in reports
_OS_NAMES = {"darwin": "macos", "win32": "windows", "cygwin": "windows", "linux": "linux"}


def os_name() -> str:
    for prefix, name in _OS_NAMES.items():
        if sys.platform.startswith(prefix):
            return name
    return sys.platform


def arch() -> str:
    machine = platform.machine().lower()
    return {"amd64": "x86_64", "arm64": "aarch64"}.get(machine, machine) or "unknown"


def collect_system_info() -> list[tuple[str, str]]:
    return [("OS", os_name()), ("Arch", arch())]
