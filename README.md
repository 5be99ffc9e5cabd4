# minivcs

A small version control system that keeps its history in a `.vcs/` directory
alongside your files. File contents and directory trees are stored under their
SHA-256 hashes, commits under a hash of the commit time and message, and
branches are plain files under `.vcs/refs/heads/` naming a commit.

## Installation

```
pip install .
```

This installs the `vcs` command.

## Usage

Every command works on the current directory, so run it from the top of your
working directory.

```
vcs init                     # create .vcs/ with HEAD on the master branch
vcs add <path> [<path>...]   # stage files, or every file under a directory
vcs rm <path> [<path>...]    # unstage files
vcs status                   # staged, unstaged and untracked changes
vcs commit "<message>"       # record the staged snapshot on the current branch
vcs log                      # walk the current branch back to its first commit
vcs branch <name>            # new branch at the current commit
vcs checkout <name>          # switch branch and rebuild the working directory
vcs restore <file>           # overwrite a file with its content from the last commit
```

Running `vcs` with no command, or `commit`, `restore`, `branch` or `checkout`
without their argument, prints a usage line and exits with status 1. Errors
(no repository, an unknown branch, a file missing from the last commit) are
printed to standard error.

`vcs checkout` removes everything in the working directory except `.vcs/`
before it writes the branch's snapshot and replaces the staging index with it,
so commit your work before switching.

`vcs status` prints coloured output in three sections: changes to be committed
(index against the last commit), changes not staged for commit (working files
against the index) and untracked files.

### Ignoring files

A `.vcsignore` file in the working directory holds one pattern per line, in
the style of `.gitignore`. It is used by `vcs add` and `vcs status`.

- lines starting with `#` are comments;
- `*` matches within one path segment, `**` across segments;
- a trailing `/` matches everything below a directory;
- a leading `/` anchors the pattern to the top of the working directory;
- a leading `!` negates the pattern.

The first pattern that matches a path decides it.

## Using it from Python

Each command is also a function that takes the working directory as `root`
(the current directory when left out):

```python
from pathlib import Path

from minivcs.repo import init_repository
from minivcs.staging import add
from minivcs.commit import commit
from minivcs.history import log
from minivcs.status import status, format_status

root = Path("project")
init_repository(root)
add(["notes.txt"], root)             # returns the paths newly staged
commit_id = commit("first snapshot", root)

for entry in log(root):              # LogEntry(commit_id, time, message, parent)
    print(entry.commit_id, entry.message)

report = status(root)                # a StatusReport
print(report.is_clean)
print(format_status(report))
```

Other functions: `minivcs.staging.rm`, `minivcs.branches.branch`,
`minivcs.branches.checkout` and `minivcs.history.restore`; `minivcs.repo`
holds the lower-level helpers for hashing, the index, trees and ignore rules.

Commands run outside a repository raise `minivcs.repo.NotARepositoryError`.
`checkout` raises `LookupError` for an unknown branch and `ValueError` when
the branch has no valid commit; `restore` raises `LookupError` when there is
no commit or the file is not in it.

## What it does not do

There is no merging, no diffing of file contents, no tags and no remote
repositories: history is local to one `.vcs/` directory and moves only by
committing and switching branches.

## Running the tests

```
pip install ".[test]"
pytest
```