"""LXC Container Management Module."""

from .core import (
    LxcConfig,
    LxcError,
    LxcLaunchError,
    LxcExecutionError,
    LxcCommander,
    RealLxcCommander,
    CommandContext,
    build_parser,
    main,
    print_status,
    print_success,
    print_error,
    run,
)

__all__ = [
    "LxcConfig",
    "LxcError",
    "LxcLaunchError",
    "LxcExecutionError",
    "LxcCommander",
    "RealLxcCommander",
    "CommandContext",
    "build_parser",
    "main",
    "print_status",
    "print_success",
    "print_error",
    "run",
]
