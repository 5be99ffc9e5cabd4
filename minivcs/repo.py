"""Repository layout, content hashing, the staging index and ignore rules."""

from __future__ import annotations

import hashlib
import os
import re
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

VCS_DIR = ".vcs"
OBJECTS_DIR = "objects"
COMMITS_DIR = "commits"
HEADS_DIR = "refs/heads"
INDEX_FILE = "index"
HEAD_FILE = "HEAD"
IGNORE_FILE = ".vcsignore"
DEFAULT_BRANCH_REF = "refs/heads/master"

PathLike = Union[str, "os.PathLike[str]"]


class NotARepositoryError(Exception):
    """Raised when a command needs a repository but there is none."""

    def __init__(self, root: Path):
        super().__init__(
            "fatal: Not a VCS repository (or any of the parent directories): .vcs"
        )
        self.root = root


@dataclass(frozen=True)
class IgnorePattern:
    """One rule from the ignore file, compiled to a regular expression."""

    regex: "re.Pattern[str]"
    negated: bool
    source: str


def _resolve_root(root: Optional[PathLike]) -> Path:
    return Path.cwd() if root is None else Path(root)


def _first_line(path: Path) -> str:
    try:
        text = path.read_text()
    except OSError:
        return ""
    lines = text.splitlines()
    return lines[0] if lines else ""


def init_repository(root: Optional[PathLike] = None) -> Path:
    """Create an empty repository under ``root`` and return its ``.vcs`` path."""
    vcs = _resolve_root(root) / VCS_DIR
    (vcs / OBJECTS_DIR).mkdir(parents=True, exist_ok=True)
    (vcs / HEADS_DIR).mkdir(parents=True, exist_ok=True)
    (vcs / HEAD_FILE).write_text(DEFAULT_BRANCH_REF)
    print("Initialized empty VCS repository in .vcs/")
    return vcs


def ensure_initialized(root: Optional[PathLike] = None) -> Path:
    """Return the ``.vcs`` directory, raising if the repository does not exist."""
    root_path = _resolve_root(root)
    vcs = root_path / VCS_DIR
    if not vcs.exists():
        raise NotARepositoryError(root_path)
    return vcs


def hash_string(data: Union[str, bytes]) -> str:
    """SHA-256 of ``data`` as hex, each byte written without zero padding."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return "".join(f"{byte:x}" for byte in hashlib.sha256(data).digest())


def hash_file(path: PathLike) -> str:
    """Hash a file's contents; an unreadable file hashes to the empty string."""
    try:
        content = Path(path).read_bytes()
    except OSError:
        return ""
    return hash_string(content)


def load_index(root: Optional[PathLike] = None) -> dict[str, str]:
    """Read the staging index as a mapping of relative path to blob hash."""
    index_path = _resolve_root(root) / VCS_DIR / INDEX_FILE
    index: dict[str, str] = {}
    if not index_path.is_file():
        return index
    for line in index_path.read_text().splitlines():
        fields = line.split()
        if len(fields) >= 2:
            index[fields[0]] = fields[1]
    return index


def save_index(index: Mapping[str, str], root: Optional[PathLike] = None) -> None:
    """Write the staging index, one ``path hash`` pair per line."""
    index_path = _resolve_root(root) / VCS_DIR / INDEX_FILE
    index_path.write_text(
        "".join(f"{name} {digest}\n" for name, digest in sorted(index.items()))
    )


def clean_working_directory(root: Optional[PathLike] = None) -> None:
    """Remove everything in the working directory except the repository."""
    for entry in _resolve_root(root).iterdir():
        if entry.name == VCS_DIR:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def load_tree_recursive(
    tree_hash: str, base_path: str = "", root: Optional[PathLike] = None
) -> dict[str, str]:
    """Flatten a stored tree into a mapping of relative path to blob hash."""
    tree_path = _resolve_root(root) / VCS_DIR / OBJECTS_DIR / tree_hash
    tree: dict[str, str] = {}
    if not tree_hash or not tree_path.is_file():
        return tree
    for line in tree_path.read_text().splitlines():
        kind, obj_hash, name = (line.split() + ["", "", ""])[:3]
        full_path = f"{base_path}{os.sep}{name}" if base_path else name
        if kind == "blob":
            tree[full_path] = obj_hash
        elif kind == "tree":
            tree.update(load_tree_recursive(obj_hash, full_path, root))
    return tree


def _pattern_to_regex(rule: str) -> str:
    pattern = re.sub(r"\.", r"\\.", rule)
    pattern = re.sub(r"\*\*/?", "(.*/)?", pattern)
    pattern = re.sub(r"\*", "[^/]*", pattern)
    if pattern.endswith("/"):
        pattern += ".*"
    if rule.startswith("/"):
        return "^" + pattern
    return "(^|.*/)" + pattern


def load_ignore_patterns(root: Optional[PathLike] = None) -> list[IgnorePattern]:
    """Read the ignore file; a missing file yields no patterns."""
    ignore_path = _resolve_root(root) / IGNORE_FILE
    try:
        lines = ignore_path.read_text().splitlines()
    except OSError:
        return []
    patterns = []
    for line in lines:
        if not line or line.startswith("#"):
            continue
        negated = line.startswith("!")
        rule = line[1:] if negated else line
        regex_text = _pattern_to_regex(rule)
        patterns.append(IgnorePattern(re.compile(regex_text), negated, regex_text))
    return patterns


def is_ignored(rel_path: str, patterns: Iterable[IgnorePattern]) -> bool:
    """Decide by the first matching pattern whether a path is ignored."""
    normalized = rel_path.replace("\\", "/")
    for pattern in patterns:
        if pattern.regex.fullmatch(normalized):
            return not pattern.negated
    return False


def read_head_ref(root: Optional[PathLike] = None) -> str:
    """Return the reference HEAD points to, or an empty string."""
    return _first_line(_resolve_root(root) / VCS_DIR / HEAD_FILE)


def read_ref(ref: str, root: Optional[PathLike] = None) -> str:
    """Return the commit id a reference holds, or an empty string."""
    if not ref:
        return ""
    return _first_line(_resolve_root(root) / VCS_DIR / ref)


def _warn(message: str) -> None:
    print(message, file=sys.stderr)