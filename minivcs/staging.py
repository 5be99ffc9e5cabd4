"""Adding files to and removing files from the staging index."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Iterable, Optional

from minivcs.repo import (
    OBJECTS_DIR,
    IgnorePattern,
    PathLike,
    _warn,
    ensure_initialized,
    hash_file,
    is_ignored,
    load_ignore_patterns,
    load_index,
    save_index,
)


def _resolve(path_str: PathLike, root: Path) -> Path:
    path = Path(path_str)
    return path if path.is_absolute() else root / path


def _stage_file(
    path: Path,
    root: Path,
    objects: Path,
    index: dict[str, str],
    patterns: list[IgnorePattern],
) -> Optional[str]:
    rel_path = os.path.relpath(path, root)
    digest = hash_file(path)
    if is_ignored(rel_path, patterns):
        return None
    if index.get(rel_path) == digest:
        return None
    blob = objects / digest
    if not blob.exists():
        shutil.copyfile(path, blob)
    index[rel_path] = digest
    print(f"Added: {rel_path}")
    return rel_path


def add(paths: Iterable[PathLike], root: Optional[PathLike] = None) -> list[str]:
    """Stage files and directory trees; return the paths newly staged."""
    vcs = ensure_initialized(root)
    root_path = vcs.parent
    objects = vcs / OBJECTS_DIR
    index = load_index(root_path)
    patterns = load_ignore_patterns(root_path)
    added: list[str] = []

    for path_str in paths:
        path = _resolve(path_str, root_path)
        if not path.exists():
            _warn(f"File not found {path_str}")
            continue
        if path.is_file():
            candidates = [path]
        elif path.is_dir():
            candidates = [entry for entry in sorted(path.rglob("*")) if entry.is_file()]
        else:
            candidates = []
        for candidate in candidates:
            staged = _stage_file(candidate, root_path, objects, index, patterns)
            if staged is not None:
                added.append(staged)

    save_index(index, root_path)
    return added


def rm(files: Iterable[PathLike], root: Optional[PathLike] = None) -> list[str]:
    """Unstage files; return the paths that were removed from the index."""
    vcs = ensure_initialized(root)
    root_path = vcs.parent
    index = load_index(root_path)
    removed: list[str] = []

    for file in files:
        rel_path = os.path.relpath(_resolve(file, root_path), root_path)
        if index.pop(rel_path, None) is not None:
            print(f"Removed: {rel_path}")
            removed.append(rel_path)
        else:
            print(f"Not staged: {rel_path}")

    save_index(index, root_path)
    return removed