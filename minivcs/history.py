"""Walking commit history and restoring files from the last commit."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from minivcs.branches import extract_tree_from_commit
from minivcs.repo import (
    COMMITS_DIR,
    OBJECTS_DIR,
    PathLike,
    _warn,
    ensure_initialized,
    load_tree_recursive,
    read_head_ref,
    read_ref,
)


@dataclass(frozen=True)
class LogEntry:
    """One commit as shown by the log."""

    commit_id: str
    time: str
    message: str
    parent: str


def _read_entry(commit_id: str, text: str) -> LogEntry:
    fields = {"message": "", "time": "", "parent": ""}
    prefixes = {
        "# Message: ": "message",
        "# Time: ": "time",
        "# Parent: ": "parent",
    }
    for line in text.splitlines():
        for prefix, key in prefixes.items():
            if line.startswith(prefix):
                fields[key] = line[len(prefix):]
                break
    return LogEntry(commit_id, fields["time"], fields["message"], fields["parent"])


def log(root: Optional[PathLike] = None) -> list[LogEntry]:
    """Print and return the commits of the current branch, newest first."""
    vcs = ensure_initialized(root)
    root_path = vcs.parent
    commit_id = read_ref(read_head_ref(root_path), root_path)
    entries: list[LogEntry] = []

    while commit_id:
        commit_path = vcs / COMMITS_DIR / commit_id
        if not commit_path.is_file():
            _warn(f"Commit object not found: {commit_id}")
            break
        entry = _read_entry(commit_id, commit_path.read_text())
        print(f"CommitId: {entry.commit_id}")
        print(f"Time: {entry.time}")
        print(f"Message: {entry.message}\n")
        entries.append(entry)
        commit_id = entry.parent
    return entries


def restore(filename: PathLike, root: Optional[PathLike] = None) -> Path:
    """Overwrite a file with its content from the last commit; return its path."""
    vcs = ensure_initialized(root)
    root_path = vcs.parent
    commit_id = read_ref(read_head_ref(root_path), root_path)
    if not commit_id:
        raise LookupError("No commits to restore from.")

    tree_hash = extract_tree_from_commit(commit_id, root_path)
    files = load_tree_recursive(tree_hash, "", root_path)

    target = Path(filename)
    if not target.is_absolute():
        target = root_path / target
    digest = files.get(os.path.relpath(target, root_path))
    if digest is None:
        raise LookupError(f"File not found in last commit: {filename}")

    blob = vcs / OBJECTS_DIR / digest
    if not blob.is_file():
        raise FileNotFoundError(f"Object data missing for file: {filename}")

    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(blob, target)
    print(f"Restored: {filename}")
    return target