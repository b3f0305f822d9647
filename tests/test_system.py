from __future__ import annotations

import io
import subprocess
import unittest
from types import SimpleNamespace
from unittest import mock

from linuxbasix.safety.guardrails import ensure_sudo
from linuxbasix.utils.system import (
    COMMAND_NOT_FOUND,
    COMMAND_NOT_EXECUTABLE,
    SubprocessExecutor,
    detect_package_managers,
    format_failure,
    get_kernel_version,
    get_os_name,
    get_system_info,
)


class DetectionTests(unittest.TestCase):
    def test_keeps_candidate_order(self) -> None:
        present = {"/usr/bin/snap", "/usr/bin/apt", "/usr/bin/dnf"}
        with mock.patch(
            "linuxbasix.utils.system.shutil.which",
            side_effect=lambda name: f"/usr/bin/{name}" if f"/usr/bin/{name}" in present else None,
        ):
            self.assertEqual(detect_package_managers(), ["apt", "dnf", "snap"])
            self.assertEqual(detect_package_managers(["snap", "pacman", "apt"]), ["snap", "apt"])

    def test_kernel_version_is_trimmed(self) -> None:
        with mock.patch("linuxbasix.utils.system.os.uname", return_value=SimpleNamespace(release=" 6.8.0-45-generic\n")):
            self.assertEqual(get_kernel_version(), "6.8.0-45-generic")

    def test_kernel_version_unknown(self) -> None:
        with mock.patch("linuxbasix.utils.system.os.uname", side_effect=OSError):
            self.assertEqual(get_kernel_version(), "Unknown")

    def test_os_name_from_os_release(self) -> None:
        data = 'NAME="Debian GNU/Linux"\nPRETTY_NAME="Debian GNU/Linux 12 (bookworm)"\n'
        with mock.patch("builtins.open", mock.mock_open(read_data=data)):
            self.assertEqual(get_os_name(), "Debian GNU/Linux 12 (bookworm)")

    def test_os_name_missing_file(self) -> None:
        with mock.patch("builtins.open", side_effect=FileNotFoundError):
            self.assertEqual(get_os_name(), "Linux (Unknown Distribution)")

    def test_system_info_without_managers(self) -> None:
        with mock.patch("linuxbasix.utils.system.detect_package_managers", return_value=[]), mock.patch(
            "linuxbasix.utils.system.get_os_name", return_value="TestOS"
        ):
            info = get_system_info()
        self.assertEqual(info["package_managers"], "None")
        self.assertEqual(info["os"], "TestOS")


class SubprocessExecutorTests(unittest.TestCase):
    def test_success_is_silent(self) -> None:
        err = io.StringIO()
        with mock.patch("linuxbasix.utils.system.subprocess.run", return_value=SimpleNamespace(returncode=0)) as run:
            self.assertEqual(SubprocessExecutor(err=err).run(["true"]), 0)
        run.assert_called_once_with(["true"])
        self.assertEqual(err.getvalue(), "")

    def test_failure_prints_diagnostic(self) -> None:
        err = io.StringIO()
        with mock.patch("linuxbasix.utils.system.subprocess.run", return_value=SimpleNamespace(returncode=100)):
            code = SubprocessExecutor(err=err).run(["sudo", "apt", "install", "-y", "git"])
        self.assertEqual(code, 100)
        self.assertIn("Command sudo apt install -y git failed with return code 100", err.getvalue())

    def test_missing_program(self) -> None:
        err = io.StringIO()
        with mock.patch("linuxbasix.utils.system.subprocess.run", side_effect=FileNotFoundError):
            code = SubprocessExecutor(err=err).run(["no-such-tool"])
        self.assertEqual(code, COMMAND_NOT_FOUND)
        self.assertIn("no-such-tool", err.getvalue())

    def test_unexecutable_program(self) -> None:
        err = io.StringIO()
        lines: list[str] = []
        with mock.patch("linuxbasix.utils.system.subprocess.run", side_effect=PermissionError), mock.patch(
            "linuxbasix.utils.system.subprocess.Popen", side_effect=OSError
        ):
            executor = SubprocessExecutor(err=err)
            self.assertEqual(executor.run(["./setup.sh"]), COMMAND_NOT_EXECUTABLE)
            self.assertEqual(executor.run(["./setup.sh"], on_output=lines.append), COMMAND_NOT_EXECUTABLE)
        self.assertIn("failed with return code 126", err.getvalue())
        self.assertEqual(lines, [format_failure(["./setup.sh"], COMMAND_NOT_EXECUTABLE)])

    def test_dry_run_does_not_execute(self) -> None:
        lines: list[str] = []
        with mock.patch("linuxbasix.utils.system.subprocess.run") as run, mock.patch(
            "linuxbasix.utils.system.subprocess.Popen"
        ) as popen:
            self.assertEqual(SubprocessExecutor(dry_run=True).run(["flatpak", "install"], on_output=lines.append), 0)
        run.assert_not_called()
        popen.assert_not_called()
        self.assertEqual(lines, ["[dry-run] flatpak install"])

    def test_streams_output(self) -> None:
        lines: list[str] = []
        process = mock.Mock()
        process.stdout = io.StringIO("one\ntwo\n")
        process.wait.return_value = 3
        with mock.patch("linuxbasix.utils.system.subprocess.Popen", return_value=process):
            code = SubprocessExecutor().run(["fc-cache", "-r"], on_output=lines.append)
        self.assertEqual(code, 3)
        self.assertEqual(lines, ["one", "two", format_failure(["fc-cache", "-r"], 3)])


class GuardrailTests(unittest.TestCase):
    def test_root_needs_no_sudo(self) -> None:
        with mock.patch("linuxbasix.safety.guardrails.os.geteuid", return_value=0), mock.patch(
            "linuxbasix.safety.guardrails.subprocess.check_call"
        ) as check_call:
            self.assertTrue(ensure_sudo())
        check_call.assert_not_called()

    def test_refused_credentials(self) -> None:
        with mock.patch("linuxbasix.safety.guardrails.os.geteuid", return_value=1000), mock.patch(
            "linuxbasix.safety.guardrails.subprocess.check_call",
            side_effect=subprocess.CalledProcessError(1, ["sudo", "-v"]),
        ), mock.patch("builtins.print"):
            self.assertFalse(ensure_sudo())

    def test_missing_sudo(self) -> None:
        with mock.patch("linuxbasix.safety.guardrails.os.geteuid", return_value=1000), mock.patch(
            "linuxbasix.safety.guardrails.subprocess.run", side_effect=FileNotFoundError
        ):
            self.assertFalse(ensure_sudo(interactive=False))

    def test_non_interactive_uses_cached_credentials(self) -> None:
        with mock.patch("linuxbasix.safety.guardrails.os.geteuid", return_value=1000), mock.patch(
            "linuxbasix.safety.guardrails.subprocess.run"
        ) as run:
            self.assertTrue(ensure_sudo(interactive=False))
        run.assert_called_once_with(["sudo", "-n", "-v"], check=True, capture_output=True)


if __name__ == "__main__":
    unittest.main()
