import argparse
import logging
import sys

from linuxbasix.app import BasixApp
from linuxbasix.console import main_menu
from linuxbasix.core.menu import MainMenuController
from linuxbasix.installers import PLAN_BUILDERS
from linuxbasix.logging_utils import DEFAULT_LOG_PATH, configure_logging
from linuxbasix.safety.guardrails import ensure_sudo
from linuxbasix.state import ProgramState
from linuxbasix.utils.system import SubprocessExecutor

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="linuxbasix", description="Select and install Linux packages from a menu.")
    p.add_argument("--tui", action="store_true", help="Use the full-screen Textual interface")
    p.add_argument("--enable-installers", action="store_true",
                   help="Bind the install rows (2, 4, 5, 6) to their install plans")
    p.add_argument("--dry-run", action="store_true", help="Log install commands instead of running them")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the log file")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    state = ProgramState()
    actions = PLAN_BUILDERS if args.enable_installers else None
    controller = MainMenuController(state, actions=actions)
    executor = SubprocessExecutor(dry_run=args.dry_run)

    try:
        if args.tui:
            # The TUI cannot prompt for a password, so cache credentials up front.
            if args.enable_installers and not args.dry_run and not ensure_sudo():
                print("\n[!] Sudo authentication failed or was cancelled.")
                print("    Install rows will be refused until credentials are cached.")
            BasixApp(controller, executor).run()
        else:
            main_menu(controller, executor=executor)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        print()
        return 130

    logger.info("Session ended: %s", state)
    return 0


if __name__ == "__main__":
    sys.exit(main())
