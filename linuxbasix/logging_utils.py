import logging
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = str(Path.home() / ".cache" / "linuxbasix" / "linuxbasix.log")


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = False,
) -> str:
    """Attach a file handler (and optionally stderr) to the root logger.

    The menu owns stdout, so console logging is off unless asked for. If
    `log_path` cannot be created we fall back to the working directory.

    Returns the path actually written to.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Calling this twice must not duplicate handlers.
    if getattr(root, "_linuxbasix_configured", False):
        return getattr(root, "_linuxbasix_log_path", log_path)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    chosen_path = log_path
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        chosen_path = str(Path.cwd() / "linuxbasix.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        root.addHandler(console)

    setattr(root, "_linuxbasix_configured", True)
    setattr(root, "_linuxbasix_log_path", chosen_path)

    logging.getLogger(__name__).info("Logging initialized (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path
