"""Creating branches and switching the working directory between them."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Optional

from minivcs.repo import (
    COMMITS_DIR,
    HEAD_FILE,
    HEADS_DIR,
    OBJECTS_DIR,
    VCS_DIR,
    PathLike,
    _warn,
    clean_working_directory,
    ensure_initialized,
    read_head_ref,
    read_ref,
    save_index,
)

_TREE_PREFIX = "# Tree: "


def _root_path(root: Optional[PathLike]) -> Path:
    return Path.cwd() if root is None else Path(root)


def branch(name: str, root: Optional[PathLike] = None) -> str:
    """Create a branch at the current commit and return that commit id."""
    vcs = ensure_initialized(root)
    root_path = vcs.parent
    current_commit = read_ref(read_head_ref(root_path), root_path)
    (vcs / HEADS_DIR / name).write_text(current_commit)
    print(f"Branch {name} created at commit {current_commit}")
    return current_commit


def extract_tree_from_commit(commit_id: str, root: Optional[PathLike] = None) -> str:
    """Return the tree hash a commit records, or an empty string."""
    if not commit_id:
        return ""
    commit_path = _root_path(root) / VCS_DIR / COMMITS_DIR / commit_id
    try:
        text = commit_path.read_text()
    except OSError:
        return ""
    for line in text.splitlines():
        if line.startswith(_TREE_PREFIX):
            return line[len(_TREE_PREFIX):]
    return ""


def restore_tree(
    tree_hash: str,
    dest_path: PathLike,
    index: dict[str, str],
    root: Optional[PathLike] = None,
) -> dict[str, str]:
    """Write a stored tree out under ``dest_path``, recording each file in ``index``."""
    root_path = _root_path(root)
    objects = root_path / VCS_DIR / OBJECTS_DIR
    try:
        text = (objects / tree_hash).read_text()
    except OSError:
        _warn(f"Tree object not found: {tree_hash}")
        return index

    dest = Path(dest_path)
    if not dest.is_absolute():
        dest = root_path / dest
    dest.mkdir(parents=True, exist_ok=True)

    for line in text.splitlines():
        kind, obj_hash, name = (line.split() + ["", "", ""])[:3]
        full_path = dest / name
        if kind == "blob":
            try:
                shutil.copyfile(objects / obj_hash, full_path)
            except OSError:
                _warn(f"Failed to restore blob: {name}")
                continue
            index[os.path.relpath(full_path, root_path)] = obj_hash
        elif kind == "tree":
            restore_tree(obj_hash, full_path, index, root_path)
    return index


def checkout(name: str, root: Optional[PathLike] = None) -> dict[str, str]:
    """Switch to a branch, replacing the working directory; return the new index."""
    root_path = _root_path(root)
    vcs = root_path / VCS_DIR
    if not (vcs / HEADS_DIR / name).exists():
        raise LookupError("Branch does not exist.")

    ref = f"{HEADS_DIR}/{name}"
    commit_id = read_ref(ref, root_path)
    (vcs / HEAD_FILE).write_text(ref)

    tree_hash = extract_tree_from_commit(commit_id, root_path)
    if not tree_hash:
        raise ValueError("Invalid commit in branch.")

    clean_working_directory(root_path)
    index = restore_tree(tree_hash, root_path, {}, root_path)
    save_index(index, root_path)
    print(f"Switched to branch: {name}")
    return index