"""Git operation utilities"""

import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from ..constants import FULL_SHA_LENGTH

logger = logging.getLogger(__name__)

SHA_PATTERN = re.compile(r"^[0-9a-fA-F]{%d}$" % FULL_SHA_LENGTH)


def is_full_sha(value: str) -> bool:
    """
    Check if value is a complete commit id

    Args:
        value: Revision specifier

    Returns:
        True for a 40 character hex string
    """
    return bool(SHA_PATTERN.match(value or ""))


def run_git(args: List[str],
            cwd: Optional[Path] = None,
            env: Optional[Dict[str, str]] = None) -> str:
    """
    Run a git command and return its standard output

    Args:
        args: Arguments after ``git``
        cwd: Working directory
        env: Extra environment variables

    Returns:
        Stripped standard output

    Raises:
        subprocess.CalledProcessError: If git exits non-zero
        FileNotFoundError: If git is not installed
    """
    full_env = os.environ.copy()
    if env:
        full_env.update(env)

    logger.debug(f"git {' '.join(args)}")
    result = subprocess.run(
        ['git'] + args,
        cwd=str(cwd) if cwd else None,
        env=full_env,
        capture_output=True,
        text=True,
        check=True
    )
    return result.stdout.strip()


def ls_remote(repository: str,
              pattern: str,
              env: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    List remote references matching a pattern

    Args:
        repository: Repository URL or path
        pattern: Ref pattern passed to ``git ls-remote``

    Returns:
        Mapping of ref name to commit id
    """
    output = run_git(['ls-remote', repository, pattern], env=env)

    refs = {}
    for line in output.splitlines():
        parts = line.split()
        if len(parts) == 2:
            sha, ref = parts
            refs[ref] = sha
    return refs


def clone(repository: str,
          destination: Path,
          remote: str = 'origin',
          depth: Optional[int] = None,
          env: Optional[Dict[str, str]] = None) -> None:
    """
    Clone a repository into a new directory

    Args:
        repository: Repository URL or path
        destination: Target directory (must not exist or be empty)
        remote: Name given to the cloned remote
        depth: Create a shallow clone with this many commits
    """
    args = ['clone', '--quiet', '--origin', remote]
    if depth:
        args += ['--depth', str(depth)]
    args += [repository, str(destination)]
    run_git(args, env=env)


def checkout_revision(path: Path,
                      revision: str,
                      branch: str,
                      env: Optional[Dict[str, str]] = None) -> None:
    """
    Point a local branch at revision and check it out

    Args:
        path: Repository path
        revision: Commit id
        branch: Local branch name to (re)create
    """
    run_git(['checkout', '--quiet', '-B', branch, revision], cwd=path, env=env)


def update_submodules(path: Path, env: Optional[Dict[str, str]] = None) -> None:
    """
    Initialize and update submodules recursively

    Args:
        path: Repository path
    """
    run_git(['submodule', 'sync', '--quiet'], cwd=path, env=env)
    run_git(['submodule', 'update', '--init', '--recursive', '--quiet'], cwd=path, env=env)


def get_head_revision(path: Path) -> Optional[str]:
    """
    Get the commit id checked out in a repository

    Args:
        path: Repository path

    Returns:
        Commit id or None
    """
    try:
        return run_git(['rev-parse', 'HEAD'], cwd=path)
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
