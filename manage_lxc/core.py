#!/usr/bin/env python3
"""
LXC Container Management Script

Provides commands for managing LXC containers by delegating to the
lxc-* command-line tools.

Usage:
    manage-lxc [-P PATH] [-v|-q] <command> [options]

Environment:
    LXC_PATH           - Alternate container store passed to every tool as -P
    MANAGE_LXC_VERBOSE - Set to 1/true/yes to echo every command before it runs
"""

import argparse
import os
import subprocess
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, TextIO


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class LxcConfig:
    """Toolset configuration."""
    lxcpath: Optional[str] = None  # alternate container store, passed as -P
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "LxcConfig":
        """Build configuration from the parsed global options."""
        return cls(lxcpath=args.lxcpath or None, verbose=args.verbose)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


# =============================================================================
# ERRORS
# =============================================================================

class LxcError(Exception):
    """Base error for a failed LXC tool invocation."""

    def __init__(self, program: str, message: str):
        super().__init__(message)
        self.program = program


class LxcLaunchError(LxcError):
    """The external program could not be started at all."""


class LxcExecutionError(LxcError):
    """The external program ran and exited unsuccessfully."""

    def __init__(self, program: str, returncode: int, stdout: str = "", stderr: str = ""):
        detail = stderr.strip()
        if returncode < 0:
            detail = f"terminated by signal {-returncode}" + (f": {detail}" if detail else "")
        super().__init__(program, f"{program} failed: {detail}")
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


# =============================================================================
# UTILITIES
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    GREEN = '\033[32m'
    RED = '\033[31m'
    BLUE = '\033[34m'
    RESET = '\033[0m'


def print_status(message: str, file: Optional[TextIO] = None) -> None:
    """Print an informational status message."""
    print(f"{Colors.BLUE}[INFO]{Colors.RESET} {message}", file=file)


def print_success(message: str) -> None:
    """Print a success message."""
    print(f"{Colors.GREEN}[SUCCESS]{Colors.RESET} {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    print(f"{Colors.RED}[ERROR]{Colors.RESET} {message}", file=sys.stderr)


def run(cmd: List[str], verbose: bool = False) -> subprocess.CompletedProcess:
    """
    Run a command, wait for it and capture its output.

    Args:
        cmd: Command and arguments to run
        verbose: If True, echo the command line to stderr first

    Returns:
        CompletedProcess instance with text stdout/stderr

    Raises:
        LxcLaunchError: the program could not be started
        LxcExecutionError: the program exited with a non-zero status
    """
    program = cmd[0]
    if verbose:
        print_status(f"Running: {' '.join(cmd)}", file=sys.stderr)
    try:
        cp = subprocess.run(
            cmd, check=False, text=True,
            stdout=subprocess.PIPE, stderr=subprocess.PIPE,
        )
    except OSError as e:
        reason = e.strerror or str(e)
        raise LxcLaunchError(program, f"Failed to execute {program}: {reason}") from e

    if cp.returncode != 0:
        raise LxcExecutionError(program, cp.returncode, cp.stdout or "", cp.stderr or "")
    return cp


# =============================================================================
# LXC COMMANDER
# =============================================================================

class LxcCommander(ABC):
    """The six container lifecycle operations."""

    @abstractmethod
    def create(self, name: str, template: str) -> None:
        ...

    @abstractmethod
    def start(self, name: str) -> None:
        ...

    @abstractmethod
    def stop(self, name: str) -> None:
        ...

    @abstractmethod
    def delete(self, name: str) -> None:
        ...

    @abstractmethod
    def list(self) -> str:
        ...

    @abstractmethod
    def shutdown(self, name: str) -> None:
        ...


class RealLxcCommander(LxcCommander):
    """Commander backed by the lxc-* programs on PATH."""

    CREATE_PROGRAM = "lxc-create"
    START_PROGRAM = "lxc-start"
    STOP_PROGRAM = "lxc-stop"
    DESTROY_PROGRAM = "lxc-destroy"
    LIST_PROGRAM = "lxc-ls"

    def __init__(self, config: Optional[LxcConfig] = None):
        self.config = config or LxcConfig()

    def get_cmd(self, program: str, *args: str) -> List[str]:
        """Get the full command line for a tool, including -P when configured."""
        cmd = [program]
        if self.config.lxcpath:
            cmd.extend(["-P", self.config.lxcpath])
        cmd.extend(args)
        return cmd

    def execute(self, program: str, *args: str) -> subprocess.CompletedProcess:
        return run(self.get_cmd(program, *args), verbose=self.config.verbose)

    def create(self, name: str, template: str) -> None:
        self.execute(self.CREATE_PROGRAM, "-n", name, "-t", template)

    def start(self, name: str) -> None:
        self.execute(self.START_PROGRAM, "-n", name)

    def stop(self, name: str) -> None:
        self.execute(self.STOP_PROGRAM, "-n", name)

    def delete(self, name: str) -> None:
        self.execute(self.DESTROY_PROGRAM, "-n", name)

    def list(self) -> str:
        cp = self.execute(self.LIST_PROGRAM, "-f")
        return cp.stdout or ""

    def shutdown(self, name: str) -> None:
        # lxc-stop without -k already requests a clean shutdown first
        self.execute(self.STOP_PROGRAM, "-n", name)


# =============================================================================
# CONTEXT
# =============================================================================

@dataclass
class CommandContext:
    """Context passed to all command handlers."""
    config: LxcConfig
    commander: LxcCommander
    args: argparse.Namespace


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_create(ctx: CommandContext) -> None:
    """Create a container from a template."""
    ctx.commander.create(ctx.args.name, ctx.args.template)
    print_success(f"Container {ctx.args.name} created with template {ctx.args.template}")


def cmd_start(ctx: CommandContext) -> None:
    """Start a container."""
    ctx.commander.start(ctx.args.name)
    print_success(f"Container {ctx.args.name} started")


def cmd_stop(ctx: CommandContext) -> None:
    """Stop a container."""
    ctx.commander.stop(ctx.args.name)
    print_success(f"Container {ctx.args.name} stopped")


def cmd_delete(ctx: CommandContext) -> None:
    """Destroy a container."""
    ctx.commander.delete(ctx.args.name)
    print_success(f"Container {ctx.args.name} deleted")


def cmd_ls(ctx: CommandContext) -> None:
    """List containers."""
    print(ctx.commander.list(), end="")


def cmd_shutdown(ctx: CommandContext) -> None:
    """Shut a container down."""
    ctx.commander.shutdown(ctx.args.name)
    print_success(f"Container {ctx.args.name} shutdown")


# =============================================================================
# ARGUMENT PARSER
# =============================================================================

def non_empty(value: str) -> str:
    """argparse type rejecting empty or blank strings."""
    if not value.strip():
        raise argparse.ArgumentTypeError("must not be empty")
    return value


def _add_name_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", "-n", required=True, type=non_empty,
                        help="Container name (required)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the container lifecycle commands."""
    parser = argparse.ArgumentParser(
        prog="manage-lxc",
        description="LXC container management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--lxcpath", "-P",
        default=os.environ.get("LXC_PATH"),
        help="Alternate container store (default: LXC_PATH env var, or the LXC default)",
    )
    verbose_default = _env_flag("MANAGE_LXC_VERBOSE")
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        default=verbose_default,
        help="Echo each lxc command to stderr before running it",
    )
    parser.add_argument(
        "--quiet", "-q", dest="verbose", action="store_false",
        default=verbose_default,
        help="Do not echo lxc commands (overrides MANAGE_LXC_VERBOSE)",
    )

    sub = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    # create
    p = sub.add_parser("create", help="Create a container")
    _add_name_argument(p)
    p.add_argument("--template", "-t", required=True, type=non_empty,
                   help="Template to create the container from (required)")
    p.set_defaults(func=cmd_create)

    # start
    p = sub.add_parser("start", help="Start a container")
    _add_name_argument(p)
    p.set_defaults(func=cmd_start)

    # stop
    p = sub.add_parser("stop", help="Stop a container")
    _add_name_argument(p)
    p.set_defaults(func=cmd_stop)

    # delete
    p = sub.add_parser("delete", help="Destroy a container")
    _add_name_argument(p)
    p.set_defaults(func=cmd_delete)

    # ls
    p = sub.add_parser("ls", help="List containers")
    p.set_defaults(func=cmd_ls)

    # shutdown
    p = sub.add_parser("shutdown", help="Shut a container down")
    _add_name_argument(p)
    p.set_defaults(func=cmd_shutdown)

    return parser


# =============================================================================
# MAIN
# =============================================================================

def main(
    argv: Optional[List[str]] = None,
    commander: Optional[LxcCommander] = None,
) -> int:
    """
    Main entry point for the management script.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        commander: Commander to dispatch to (defaults to RealLxcCommander)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return int(getattr(e, "code", 1) or 0)

    config = LxcConfig.from_args(args)
    ctx = CommandContext(
        config=config,
        commander=commander or RealLxcCommander(config),
        args=args,
    )

    try:
        args.func(ctx)
        return 0
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except LxcExecutionError as e:
        print_error(str(e))
        if e.returncode < 0:
            return 128 - e.returncode
        return e.returncode if e.returncode else 1
    except LxcError as e:
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
