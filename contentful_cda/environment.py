"""Runtime environment probe, computed once and passed into the client factory."""

import platform
import sys
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True, slots=True)
class RuntimeEnvironment:
    """Capabilities of the interpreter host that affect outgoing headers.

    ``server_side`` is False for browser-hosted interpreters, where the host
    rejects script-set ``user-agent`` and ``Accept-Encoding`` headers.
    """

    server_side: bool
    runtime: str
    os_name: str | None = None


def _os_name() -> str | None:
    system = platform.system()
    if not system:
        return None
    if system == "Darwin":
        return "macOS"
    return system


@lru_cache(maxsize=1)
def detect_environment() -> RuntimeEnvironment:
    """Probe the current interpreter once; later calls return the cached result."""
    version = platform.python_version()
    if sys.platform == "emscripten":
        return RuntimeEnvironment(server_side=False, runtime=f"pyodide/{version}")
    return RuntimeEnvironment(
        server_side=True,
        runtime=f"{platform.python_implementation().lower()}/{version}",
        os_name=_os_name(),
    )
