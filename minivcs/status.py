"""Comparing the last commit, the staging index and the working directory."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from minivcs.branches import extract_tree_from_commit
from minivcs.repo import (
    VCS_DIR,
    PathLike,
    ensure_initialized,
    hash_file,
    is_ignored,
    load_ignore_patterns,
    load_index,
    load_tree_recursive,
    read_head_ref,
    read_ref,
)

_BOLD = "\033[1m"
_RESET = "\033[0m"


@dataclass
class StatusReport:
    """Differences between the last commit, the index and the working directory."""

    staged_new: list[str] = field(default_factory=list)
    staged_modified: list[str] = field(default_factory=list)
    staged_deleted: list[str] = field(default_factory=list)
    unstaged_deleted: list[str] = field(default_factory=list)
    unstaged_modified: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not any(
            (
                self.staged_new,
                self.staged_modified,
                self.staged_deleted,
                self.unstaged_deleted,
                self.unstaged_modified,
                self.untracked,
            )
        )


def status(root: Optional[PathLike] = None) -> StatusReport:
    """Work out which files are staged, changed or untracked."""
    vcs = ensure_initialized(root)
    root_path = vcs.parent
    patterns = load_ignore_patterns(root_path)
    index = load_index(root_path)

    head_commit = read_ref(read_head_ref(root_path), root_path)
    tree_hash = extract_tree_from_commit(head_commit, root_path)
    last_commit = load_tree_recursive(tree_hash, "", root_path)

    current: dict[str, str] = {}
    for entry in sorted(root_path.rglob("*")):
        if not entry.is_file():
            continue
        rel_path = os.path.relpath(entry, root_path)
        if VCS_DIR in rel_path or is_ignored(rel_path, patterns):
            continue
        current[rel_path] = hash_file(entry)

    staged = sorted(index)
    return StatusReport(
        staged_new=[f for f in staged if f not in last_commit],
        staged_modified=[
            f for f in staged if f in last_commit and last_commit[f] != index[f]
        ],
        staged_deleted=[f for f in sorted(last_commit) if f not in index],
        unstaged_deleted=[f for f in staged if f not in current],
        unstaged_modified=[f for f in staged if f in current and current[f] != index[f]],
        untracked=[
            f for f in sorted(current) if f not in last_commit and f not in index
        ],
    )


def _line(colour: str, text: str) -> str:
    return f"\033[{colour}m  {text}{_RESET}\n"


def format_status(report: StatusReport) -> str:
    """Render a report as coloured terminal text."""
    parts = [f"{_BOLD}Changes to be committed:{_RESET}\n"]
    parts += [_line("32", f"New file:    {f}") for f in report.staged_new]
    parts += [_line("36", f"Modified:    {f}") for f in report.staged_modified]
    parts += [_line("31", f"Deleted:    {f}") for f in report.staged_deleted]

    parts.append(f"\n{_BOLD}Changes not staged for commit:{_RESET}\n")
    parts += [_line("31", f"Deleted:    {f}") for f in report.unstaged_deleted]
    parts += [_line("33", f"Modified:   {f}") for f in report.unstaged_modified]

    parts.append(f"\n{_BOLD}Untracked files:{_RESET}\n")
    parts += [_line("91", f) for f in report.untracked]
    return "".join(parts)