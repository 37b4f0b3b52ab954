"""Shared fixtures: an in-memory checkout provider and a recording executor."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from deploy_revision.api.exceptions import CheckoutError, ResolutionError
from deploy_revision.executors import ShellCommandExecutor
from deploy_revision.models import DeployConfig
from deploy_revision.providers.base import CheckoutProvider


class FakeCheckoutProvider(CheckoutProvider):
    """Serves file trees from a dict and records every checkout."""

    def __init__(self, trees: Dict[str, Dict[str, str]], aliases: Optional[Dict[str, str]] = None):
        self.trees = trees
        self.aliases = aliases or {}
        self.checkouts: List[str] = []
        self.resolved: List[str] = []
        self.fail_checkout = False

    def resolve(self, spec: str) -> str:
        self.resolved.append(spec)
        revision = self.aliases.get(spec, spec)
        if revision not in self.trees:
            raise ResolutionError(f"unknown revision {spec}", spec=spec)
        return revision

    def checkout(self, revision: str, destination: Path) -> None:
        self.checkouts.append(revision)
        destination.mkdir()
        if self.fail_checkout:
            (destination / "partial").write_text("half done")
            raise CheckoutError("simulated checkout failure", revision=revision)
        for name, content in self.trees[revision].items():
            path = destination / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)


class RecordingExecutor(ShellCommandExecutor):
    """Runs commands for real and remembers what ran where."""

    def __init__(self):
        super().__init__()
        self.calls: List[Tuple[str, Path]] = []

    def run(self, command, working_dir, environment=None):
        self.calls.append((command, Path(working_dir)))
        return super().run(command, working_dir, environment)

    def commands(self) -> List[str]:
        return [command for command, _ in self.calls]


APP_TREES = {
    "rev-a": {"app/app.rb": "this is the first version of the app\n"},
    "rev-b": {"app/app.rb": "this is the second version of the app\n"},
}


@pytest.fixture
def deploy_root(tmp_path: Path) -> Path:
    return tmp_path / "deploy"


@pytest.fixture
def provider() -> FakeCheckoutProvider:
    return FakeCheckoutProvider(dict(APP_TREES), aliases={"main": "rev-b", "stable": "rev-a"})


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def basic_config(deploy_root: Path) -> DeployConfig:
    """Config with no shared links, like a bare application."""
    return DeployConfig(
        deploy_to=str(deploy_root),
        symlink_before_migrate={},
        symlinks={},
    )


def snapshot_tree(root: Path) -> Dict[str, str]:
    """Map relative path -> file content or link target for everything under root."""
    tree = {}
    for path in sorted(root.rglob("*")):
        rel = str(path.relative_to(root))
        if path.is_symlink():
            tree[rel] = "-> " + os.readlink(path)
        elif path.is_file():
            tree[rel] = path.read_text()
        else:
            tree[rel] = "<dir>"
    return tree


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com",
         "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=str(cwd), capture_output=True, text=True, check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Dict[str, object]:
    """A local repository with two commits, a branch and a tag."""
    repo = tmp_path / "origin"
    repo.mkdir()
    git(repo, "init", "--quiet")
    git(repo, "checkout", "--quiet", "-b", "main")

    (repo / "app").mkdir()
    (repo / "app" / "app.rb").write_text("this is the first version of the app\n")
    git(repo, "add", ".")
    git(repo, "commit", "--quiet", "-m", "first")
    first = git(repo, "rev-parse", "HEAD")
    git(repo, "tag", "-a", "v1", "-m", "version one")

    (repo / "app" / "app.rb").write_text("this is the second version of the app\n")
    git(repo, "commit", "--quiet", "-am", "second")
    second = git(repo, "rev-parse", "HEAD")

    return {"path": repo, "first": first, "second": second}
