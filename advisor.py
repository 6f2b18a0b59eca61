#!/usr/bin/env python3
"""
Advisor — think before you run it

Prints an advisory for a potentially destructive command instead of running
it. For recursive removals the target directory is scanned and the impact is
reported: how many files and directories would go, how much space they take,
the largest file and the most common file types.

Nothing is ever executed, deleted or modified.

Usage:
    advisor reboot                     # Warn about a reboot
    advisor shutdown                   # Warn about a shutdown
    advisor rm -rf <path> [<path>...]  # Analyze what a recursive removal destroys
    advisor --top 20 rm -rf <path>     # Show the 20 most common file types
    advisor --show-config              # Show effective configuration
"""

import argparse
import logging
import shlex
import signal
import sys
from typing import Optional

from rich.markup import escape

from advisor_config import AdvisorConfig, ConfigManager
from auxiliary import format_path_for_display, setup_logging
from console_ui import ConsoleUI
from impact_report import render_impact_report
from tree_scanner import PathError, ScanResult, scan

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1

POWER_COMMANDS = ("reboot", "shutdown")

PROGRESS_EVERY_DIRS = 200


# ---------------------------------------------------------------------------
# rm argument handling
# ---------------------------------------------------------------------------


def split_rm_arguments(arguments: list[str]) -> tuple[list[str], list[str]]:
    """Split rm arguments into (flags, paths). Everything after '--' is a path."""
    flags: list[str] = []
    paths: list[str] = []
    options_done = False
    for arg in arguments:
        if not options_done and arg == "--":
            options_done = True
        elif not options_done and arg.startswith("-") and arg != "-":
            flags.append(arg)
        else:
            paths.append(arg)
    return flags, paths


def is_recursive(flags: list[str]) -> bool:
    """Return True if any rm flag requests recursive removal."""
    for flag in flags:
        if flag.startswith("--"):
            if flag == "--recursive":
                return True
        elif "r" in flag[1:] or "R" in flag[1:]:
            return True
    return False


# ---------------------------------------------------------------------------
# Advisor
# ---------------------------------------------------------------------------


class Advisor:
    """Main application class: dispatches a command to its advisory."""

    def __init__(self, args: argparse.Namespace, parser: Optional[argparse.ArgumentParser] = None):
        self.args = args
        self.parser = parser or build_parser()
        self.ui = ConsoleUI(no_color=getattr(args, "no_color", False))
        self._shutdown_requested = False

        self.config_manager = ConfigManager(getattr(args, "config_dir", None))
        self.config: AdvisorConfig = self.config_manager.load()

        top = getattr(args, "top", None)
        self.top_n = top if top is not None else self.config.top_extensions
        if getattr(args, "progress", None) is not None:
            self.show_progress = args.progress
        else:
            self.show_progress = self.config.show_progress

    # -- signal handling ----------------------------------------------------

    def _signal_handler(self, signum, frame):
        if self._shutdown_requested:
            sys.exit(EXIT_USAGE)
        self._shutdown_requested = True
        self.ui.print_warning("\nStopping scan... press Ctrl+C again to force quit.")

    # -- configuration ------------------------------------------------------

    def effective_config(self) -> AdvisorConfig:
        return AdvisorConfig(
            version=self.config.version,
            top_extensions=self.top_n,
            show_progress=self.show_progress,
        )

    def show_config(self):
        cfg = self.effective_config()
        self.ui.print_header("Advisor", "Effective configuration")
        self.ui.show_configuration(
            {
                "config file": format_path_for_display(str(self.config_manager.config_file)),
                "top extensions": cfg.top_extensions,
                "show progress": cfg.show_progress,
            }
        )

    def save_config(self):
        self.config_manager.save(self.effective_config())
        self.ui.print_success(f"Configuration saved to {escape(str(self.config_manager.config_file))}")

    # -- advisories ---------------------------------------------------------

    def advise_power(self, command: str) -> int:
        self.ui.print_info(f"You are requesting to {command} your computer.")
        self.ui.print_warning("Warning: All running applications will be closed, and unsaved work may be lost.")
        return EXIT_OK

    def advise_unknown(self, command: str, arguments: list[str]) -> int:
        command_line = shlex.join([command, *arguments])
        self.ui.print_warning("Command not recognized or not supported for analysis.")
        self.ui.print_plain(f"Double-check [bold]{escape(command_line)}[/bold] before running it.")
        return EXIT_OK

    def advise_remove(self, arguments: list[str]) -> int:
        flags, paths = split_rm_arguments(arguments)
        if not is_recursive(flags):
            return self.advise_unknown("rm", arguments)

        if not paths:
            self.ui.print_error("rm: missing directory to analyze")
            self.ui.print_usage("usage: advisor rm -rf <path> [<path>...]")
            return EXIT_USAGE

        for index, path in enumerate(paths):
            if index:
                self.ui.print_separator()
            self.ui.print_info(f'You are requesting to recursively remove the contents of "{escape(path)}".')
            self.analyze(path)
            self.ui.print_warning(
                "Warning: This operation is irreversible. "
                "All contents in the specified folder would be permanently deleted."
            )
            if self._shutdown_requested:
                break
        return EXIT_OK

    # -- scanning -----------------------------------------------------------

    def analyze(self, path: str) -> Optional[ScanResult]:
        """Scan *path* and print its impact report. Returns None if analysis failed."""
        try:
            result = self._scan(path)
        except PathError as e:
            logger.info("Analysis of %s failed: %s", path, e.reason)
            self.ui.print_error(f"Error: {escape(str(e))}")
            self.ui.print_info("Analysis was not possible; the impact of this removal is unknown.")
            return None

        render_impact_report(self.ui, result, self.top_n)
        return result

    def _scan(self, path: str) -> ScanResult:
        previous = signal.signal(signal.SIGINT, self._signal_handler)
        try:
            if not self.show_progress:
                return scan(path, should_stop=lambda: self._shutdown_requested)

            progress = self.ui.create_activity_progress()
            with progress:
                task = progress.add_task("Scanning...", total=None)

                def on_directory(dirpath: str, dirs_seen: int):
                    if dirs_seen % PROGRESS_EVERY_DIRS == 0:
                        progress.update(task, description=f"Scanning... {dirs_seen:,} dirs")

                return scan(path, should_stop=lambda: self._shutdown_requested, on_directory=on_directory)
        finally:
            signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)

    # -- main entry point ----------------------------------------------------

    def run(self) -> int:
        if getattr(self.args, "save_config", False):
            self.save_config()
        if getattr(self.args, "show_config", False):
            self.show_config()

        command = getattr(self.args, "command", None)
        arguments = list(getattr(self.args, "arguments", None) or [])

        if not command:
            if getattr(self.args, "show_config", False) or getattr(self.args, "save_config", False):
                return EXIT_OK
            self.parser.print_usage(sys.stderr)
            self.ui.print_error("No command given.")
            return EXIT_USAGE

        if command == "help":
            self.parser.print_help()
            return EXIT_OK
        if command in POWER_COMMANDS:
            return self.advise_power(command)
        if command == "rm":
            return self.advise_remove(arguments)
        return self.advise_unknown(command, arguments)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class AdvisorArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = AdvisorArgumentParser(
        prog="advisor",
        description="Advisor — warns about destructive commands without running them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  reboot, shutdown          Warn about closing all running applications
  rm -rf <path>...          Report what a recursive removal would destroy
  help                      Show this help
  <anything else>           Generic caution, no analysis

Examples:
  advisor rm -rf ~/Downloads/old-builds
  advisor --top 20 rm -r /var/tmp/cache
  advisor shutdown
        """,
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log output (-vv for debug)")
    parser.add_argument("--top", type=_positive_int, default=None, help="Number of file types to list in reports")
    progress = parser.add_mutually_exclusive_group()
    progress.add_argument(
        "--progress", dest="progress", action="store_true", default=None, help="Show a spinner while scanning"
    )
    progress.add_argument(
        "--no-progress", dest="progress", action="store_false", default=None, help="Don't show a spinner while scanning"
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--config-dir", default=None, help="Configuration directory (default: ~/.advisor)")
    parser.add_argument("--show-config", action="store_true", help="Show effective configuration")
    parser.add_argument(
        "--save-config", action="store_true", help="Persist --top and --progress/--no-progress as defaults"
    )
    parser.add_argument("command", nargs="?", help="Command you are about to run")
    parser.add_argument("arguments", nargs=argparse.REMAINDER, help="Arguments of that command")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, no_color=args.no_color)
    app = Advisor(args, parser)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
