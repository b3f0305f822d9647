import logging
from typing import Callable

from linuxbasix.catalog.definitions import (
    DEFAULT_PACKAGE_MANAGER,
    FLATHUB_REMOTE,
    FONT_COMMANDS,
    ONEPASSWORD_COMMANDS,
    PACKAGE_MANAGER_COMMANDS,
    ROW_INSTALL_1PASSWORD,
    ROW_INSTALL_APT,
    ROW_INSTALL_FLATPAK,
    ROW_INSTALL_FONTS,
    InstallPlan,
)
from linuxbasix.safety.guardrails import ensure_sudo
from linuxbasix.state import ProgramState
from linuxbasix.utils.system import CommandExecutor

logger = logging.getLogger(__name__)

NOTHING_SELECTED = "Nothing selected"


def repo_install_plan(state: ProgramState) -> InstallPlan:
    manager = state.selected_package_manager or DEFAULT_PACKAGE_MANAGER
    manager_cmds = PACKAGE_MANAGER_COMMANDS.get(manager, PACKAGE_MANAGER_COMMANDS[DEFAULT_PACKAGE_MANAGER])
    packages = sorted(state.selected_apt_programs)

    commands = []
    if packages:
        commands = [list(manager_cmds.refresh), [*manager_cmds.install, *packages]]
    # the Flathub remote is added even when no repo package is selected
    commands.append(list(FLATHUB_REMOTE))
    return InstallPlan(
        "Install original repo packages",
        f"Installs the selected repo packages with {manager} (if any) and always adds the Flathub remote.",
        commands,
    )


def flatpak_install_plan(state: ProgramState) -> InstallPlan:
    flatpaks = sorted(state.selected_flatpak_programs)
    commands = [["flatpak", "install", "-y", "flathub", *flatpaks]] if flatpaks else []
    return InstallPlan(
        "Install Flatpak packages",
        "Installs the selected Flatpaks from Flathub.",
        commands,
    )


def onepassword_plan(state: ProgramState) -> InstallPlan:
    return InstallPlan(
        "Install 1Password (via AgileBit repo)",
        "Adds the AgileBits apt repository and signing keys, then installs 1password.",
        [list(cmd) for cmd in ONEPASSWORD_COMMANDS],
        is_risky=True,
    )


def fonts_plan(state: ProgramState) -> InstallPlan:
    return InstallPlan(
        "Install additional fonts",
        "Downloads Hack and JetBrains Mono into ~/.local/share/fonts and rebuilds the font cache.",
        [list(cmd) for cmd in FONT_COMMANDS],
    )


PLAN_BUILDERS = {
    ROW_INSTALL_APT: repo_install_plan,
    ROW_INSTALL_FLATPAK: flatpak_install_plan,
    ROW_INSTALL_1PASSWORD: onepassword_plan,
    ROW_INSTALL_FONTS: fonts_plan,
}


def run_plan(
    plan: InstallPlan,
    executor: CommandExecutor,
    out: Callable[[str], None] = print,
    sudo_check: Callable[[], bool] = ensure_sudo,
) -> bool:
    """Run every command of `plan` in order.

    A failing command is reported by the executor and does not stop the
    remaining ones. Returns False when nothing was run.
    """
    if not plan.commands:
        out(NOTHING_SELECTED)
        return False

    if plan.needs_sudo and not getattr(executor, "dry_run", False) and not sudo_check():
        out("Sudo authentication failed or was cancelled. Skipping.")
        return False

    logger.info("Running plan %r (%d commands)", plan.title, len(plan.commands))
    for argv in plan.commands:
        executor.run(argv)
    return True
