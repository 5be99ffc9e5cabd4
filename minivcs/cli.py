"""Command-line entry point."""

from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence

from minivcs.branches import branch, checkout
from minivcs.commit import commit
from minivcs.history import log, restore
from minivcs.repo import NotARepositoryError, _warn, init_repository
from minivcs.staging import add, rm
from minivcs.status import format_status, status

_USAGE = "Usage: vcs <command>"

_SINGLE_ARGUMENT: dict[str, Callable[[str], object]] = {
    "commit": commit,
    "restore": restore,
    "branch": branch,
    "checkout": checkout,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one command against the repository in the current directory."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_USAGE)
        return 1

    command, rest = args[0], args[1:]
    try:
        if command == "init":
            init_repository()
        elif command == "status":
            report = status()
            sys.stdout.write(format_status(report))
        elif command == "add":
            add(rest)
        elif command == "rm":
            rm(rest)
        elif command in _SINGLE_ARGUMENT:
            if not rest:
                print(_USAGE)
                return 1
            _SINGLE_ARGUMENT[command](rest[0])
        elif command == "log":
            log()
        else:
            print(f"Unknown command: {command}")
    except (NotARepositoryError, LookupError, ValueError, OSError) as exc:
        _warn(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())