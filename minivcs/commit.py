"""Building tree objects from the index and recording commits."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from minivcs.repo import (
    COMMITS_DIR,
    OBJECTS_DIR,
    VCS_DIR,
    PathLike,
    _warn,
    ensure_initialized,
    hash_string,
    load_index,
    read_head_ref,
    read_ref,
)


@dataclass
class _TreeNode:
    children: dict[str, "_TreeNode"] = field(default_factory=dict)
    files: dict[str, str] = field(default_factory=dict)


def _write_node(node: _TreeNode, objects: Path) -> str:
    lines = [f"blob {digest} {name}\n" for name, digest in sorted(node.files.items())]
    lines.extend(
        f"tree {_write_node(child, objects)} {name}\n"
        for name, child in sorted(node.children.items())
    )
    data = "".join(lines).encode("utf-8")
    digest = hash_string(data)
    (objects / digest).write_bytes(data)
    return digest


def build_tree_from_index(
    index: Mapping[str, str], root: Optional[PathLike] = None
) -> str:
    """Store tree objects for the index and return the root tree's hash."""
    objects = (Path.cwd() if root is None else Path(root)) / VCS_DIR / OBJECTS_DIR
    tree = _TreeNode()
    for path, digest in index.items():
        *directories, filename = Path(path).parts
        node = tree
        for directory in directories:
            node = node.children.setdefault(directory, _TreeNode())
        node.files[filename] = digest
    return _write_node(tree, objects)


def generate_commit_id(message: str, timestamp: Optional[float] = None) -> str:
    """Derive a commit id from the time in whole seconds and the message."""
    if timestamp is None:
        timestamp = time.time()
    return hash_string(f"{int(timestamp)}{message}")


def commit(message: str, root: Optional[PathLike] = None) -> Optional[str]:
    """Record the staged index as a commit; return its id, or None if nothing is staged."""
    vcs = ensure_initialized(root)
    root_path = vcs.parent
    index = load_index(root_path)
    if not index:
        print("Nothing to commit.")
        return None

    commits = vcs / COMMITS_DIR
    commits.mkdir(parents=True, exist_ok=True)

    now = time.time()
    commit_id = generate_commit_id(message, now)
    ref = read_head_ref(root_path)
    parent_id = read_ref(ref, root_path)
    tree_hash = build_tree_from_index(index, root_path)

    record = (
        f"# Commit: {commit_id}\n"
        f"# Time: {time.ctime(now)}\n"
        f"# Message: {message}\n"
        f"# Parent: {parent_id}\n"
        f"# Tree: {tree_hash}\n"
    )
    try:
        (commits / commit_id).write_text(record)
    except OSError:
        _warn("Failed to write commit.")
        return None

    (vcs / ref).write_text(commit_id)
    print(f"Commited as {commit_id}")
    return commit_id