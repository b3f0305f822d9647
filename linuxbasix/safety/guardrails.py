import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def ensure_sudo(interactive: bool = True) -> bool:
    """
    Caches sudo credentials via `sudo -v` before a plan that needs them.
    Returns True if successful, False otherwise.
    """
    if os.geteuid() == 0:
        return True

    if interactive:
        print(" [!] This step needs sudo privileges to install packages.")
        print(" [!] Requesting sudo access now to cache credentials...")

    try:
        if interactive:
            subprocess.check_call(["sudo", "-v"])
        else:
            subprocess.run(["sudo", "-n", "-v"], check=True, capture_output=True)
        return True
    except subprocess.CalledProcessError:
        logger.warning("sudo credentials were not granted")
        return False
    except FileNotFoundError:
        logger.warning("sudo is not installed")
        return False
