import logging
import os
import shlex
import shutil
import subprocess
import sys
from typing import Callable, Optional, Protocol, Sequence

from linuxbasix.catalog.definitions import PACKAGE_MANAGER_CANDIDATES

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126


def get_kernel_version() -> str:
    try:
        return os.uname().release.strip() or "Unknown"
    except (AttributeError, OSError):
        return "Unknown"


def command_exists(command: str) -> bool:
    return shutil.which(command) is not None


def detect_package_managers(candidates: Sequence[str] = PACKAGE_MANAGER_CANDIDATES) -> list:
    """Return the candidates that are installed, keeping their given order."""
    return [manager for manager in candidates if command_exists(manager)]


def get_os_name() -> str:
    try:
        with open("/etc/os-release") as f:
            for line in f:
                if line.startswith("PRETTY_NAME="):
                    return line.split("=", 1)[1].strip().strip('"')
    except FileNotFoundError:
        pass
    return "Linux (Unknown Distribution)"


def get_system_info() -> dict:
    managers = detect_package_managers()
    return {
        "os": get_os_name(),
        "kernel": get_kernel_version(),
        "package_managers": " ".join(managers) if managers else "None",
    }


def format_failure(argv: Sequence[str], returncode: int) -> str:
    return f"Command {shlex.join(argv)} failed with return code {returncode}"


class CommandExecutor(Protocol):
    def run(self, argv: Sequence[str], on_output: Optional[Callable[[str], None]] = None) -> int:
        ...


class SubprocessExecutor:
    """Runs commands synchronously and reports failures without raising.

    Without `on_output` the child inherits the terminal, so interactive
    prompts (sudo, flatpak) keep working. With it, stdout and stderr are merged
    and handed over line by line.
    """

    def __init__(self, dry_run: bool = False, err=None):
        self.dry_run = dry_run
        self.err = err

    def run(self, argv: Sequence[str], on_output: Optional[Callable[[str], None]] = None) -> int:
        argv = list(argv)
        logger.info("CMD %s", shlex.join(argv))
        if self.dry_run:
            if on_output is not None:
                on_output(f"[dry-run] {shlex.join(argv)}")
            return 0

        try:
            if on_output is None:
                returncode = subprocess.run(argv).returncode
            else:
                process = subprocess.Popen(
                    argv, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, bufsize=1
                )
                with process.stdout:
                    for line in iter(process.stdout.readline, ''):
                        on_output(line.rstrip("\n"))
                returncode = process.wait()
        except FileNotFoundError:
            returncode = COMMAND_NOT_FOUND
        except OSError as exc:
            logger.warning("Could not start %s: %s", argv[0], exc)
            returncode = COMMAND_NOT_EXECUTABLE

        if returncode != 0:
            message = format_failure(argv, returncode)
            logger.warning("%s", message)
            if on_output is not None:
                on_output(message)
            else:
                print(message, file=self.err or sys.stderr)
        return returncode
