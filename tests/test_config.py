"""Tests for DeployConfig validation and YAML loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from deploy_revision.api.exceptions import ConfigError
from deploy_revision.models import DeployConfig
from deploy_revision.services import ConfigService


def write_config(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


# ---------------------------------------------------------------------------
# DeployConfig
# ---------------------------------------------------------------------------


class TestDeployConfig:
    def test_defaults(self, tmp_path):
        config = DeployConfig(deploy_to=str(tmp_path))

        assert config.revision == "HEAD"
        assert config.remote == "origin"
        assert config.symlink_before_migrate == {}
        assert config.symlinks == {"system": "public/system", "pids": "tmp/pids", "log": "log"}
        assert config.create_dirs_before_symlink == ["tmp", "public", "config"]
        assert config.purge_before_symlink == ["log", "tmp/pids", "public/system"]
        assert not config.migrate
        assert not config.force

    def test_defaults_are_not_shared(self, tmp_path):
        first = DeployConfig(deploy_to=str(tmp_path))
        first.symlinks["uploads"] = "public/uploads"

        assert "uploads" not in DeployConfig(deploy_to=str(tmp_path)).symlinks

    @pytest.mark.parametrize("changes", [
        {"deploy_to": ""},
        {"revision": ""},
        {"symlinks": ["log"]},
        {"symlinks": {"log": "/var/log"}},
        {"symlink_before_migrate": {"db.yml": "../db.yml"}},
        {"create_dirs_before_symlink": "tmp"},
        {"migrate": "yes"},
        {"migrate": True},
    ])
    def test_invalid(self, tmp_path, changes):
        values = {"deploy_to": str(tmp_path)}
        values.update(changes)

        with pytest.raises(ConfigError):
            DeployConfig(**values)

    def test_copy(self, tmp_path):
        config = DeployConfig(deploy_to=str(tmp_path), revision="main")
        changed = config.copy(revision="v2", restart_command="touch tmp/restart.txt")

        assert changed.revision == "v2"
        assert changed.restart_command == "touch tmp/restart.txt"
        assert config.revision == "main"
        assert changed.symlinks is not config.symlinks

    def test_callbacks(self, tmp_path):
        hook = lambda ctx: None  # noqa: E731
        config = DeployConfig(deploy_to=str(tmp_path), before_symlink="rake assets", after_restart=hook)

        assert config.callbacks() == {
            "before_migrate": None,
            "before_symlink": "rake assets",
            "before_restart": None,
            "after_restart": hook,
        }
        assert "after_restart" not in config.to_dict()
        assert config.to_dict()["before_symlink"] == "rake assets"

    def test_from_dict(self, tmp_path):
        config = DeployConfig.from_dict({
            "deploy_to": str(tmp_path),
            "revision": 2024,
            "symlinks": None,
            "purge_before_symlink": None,
        })

        assert config.revision == "2024"
        assert config.symlinks == {}
        assert config.purge_before_symlink == []

    def test_from_dict_rejects_unknown_keys(self, tmp_path):
        with pytest.raises(ConfigError, match="keep_releases"):
            DeployConfig.from_dict({"deploy_to": str(tmp_path), "keep_releases": 5})

    def test_from_dict_requires_deploy_to(self):
        with pytest.raises(ConfigError):
            DeployConfig.from_dict({"repo": "git@example.com:app.git"})

    def test_from_dict_callbacks_must_be_strings(self, tmp_path):
        with pytest.raises(ConfigError):
            DeployConfig.from_dict({"deploy_to": str(tmp_path), "before_restart": ["a", "b"]})


# ---------------------------------------------------------------------------
# ConfigService
# ---------------------------------------------------------------------------


class TestConfigService:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        monkeypatch.delenv("DEPLOY_REVISION_CONFIG", raising=False)
        monkeypatch.delenv("DEPLOY_REVISION_DEPLOY_TO", raising=False)

    def test_load(self, tmp_path):
        path = write_config(tmp_path / "deploy.yaml", (
            f"deploy_to: {tmp_path / 'app'}\n"
            "repo: https://example.com/app.git\n"
            "revision: main\n"
            "symlinks:\n"
            "  log: log\n"
            "before_restart: bundle exec rake assets:precompile\n"
        ))

        config = ConfigService(path).load_config()

        assert config.deploy_to == str(tmp_path / "app")
        assert config.repo == "https://example.com/app.git"
        assert config.revision == "main"
        assert config.symlinks == {"log": "log"}
        assert config.before_restart == "bundle exec rake assets:precompile"

    def test_environment_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APP_ROOT", str(tmp_path / "srv"))
        path = write_config(tmp_path / "deploy.yaml", "deploy_to: ${APP_ROOT}/app\n")

        assert ConfigService(path).load_config().deploy_to == str(tmp_path / "srv" / "app")

    def test_overrides(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "deploy.yaml", "deploy_to: /srv/app\nrevision: main\n")
        monkeypatch.setenv("DEPLOY_REVISION_DEPLOY_TO", str(tmp_path / "from-env"))

        config = ConfigService(path).load_config(revision="v3", repo=None)

        assert config.deploy_to == str(tmp_path / "from-env")
        assert config.revision == "v3"
        assert config.repo is None

    def test_config_path_lookup(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert ConfigService().config_path == tmp_path / "deploy-revision.yaml"

        monkeypatch.setenv("DEPLOY_REVISION_CONFIG", str(tmp_path / "env.yaml"))
        assert ConfigService().config_path == tmp_path / "env.yaml"
        assert ConfigService(tmp_path / "explicit.yaml").config_path == tmp_path / "explicit.yaml"

    def test_lazy_config(self, tmp_path):
        path = write_config(tmp_path / "deploy.yaml", f"deploy_to: {tmp_path}\n")
        service = ConfigService(path)

        assert service.config is service.config

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigService(tmp_path / "absent.yaml").load_config()

    def test_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path / "deploy.yaml", "deploy_to: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            ConfigService(path).load_config()

    def test_not_a_mapping(self, tmp_path):
        path = write_config(tmp_path / "deploy.yaml", "- one\n- two\n")

        with pytest.raises(ConfigError):
            ConfigService(path).load_config()

    def test_empty_file(self, tmp_path):
        path = write_config(tmp_path / "deploy.yaml", "")

        with pytest.raises(ConfigError, match="deploy_to"):
            ConfigService(path).load_config()

    def test_render_loads_back(self, tmp_path):
        config = DeployConfig(deploy_to=str(tmp_path / "app"), revision="v1",
                              restart_command="touch tmp/restart.txt")
        path = tmp_path / "deploy.yaml"

        path.write_text(ConfigService(path).render_config(config))

        saved = yaml.safe_load(path.read_text())
        assert saved["revision"] == "v1"
        assert saved["restart_command"] == "touch tmp/restart.txt"
        assert ConfigService(path).load_config() == config

    def test_render_current_config(self, tmp_path):
        path = write_config(tmp_path / "deploy.yaml", f"deploy_to: {tmp_path}\nrevision: main\n")

        rendered = yaml.safe_load(ConfigService(path).render_config())

        assert rendered["revision"] == "main"
        assert rendered["symlinks"] == {"system": "public/system", "pids": "tmp/pids", "log": "log"}
