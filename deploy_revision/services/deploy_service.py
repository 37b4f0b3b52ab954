"""Deployment orchestration: resolve, reuse or build, link, switch, restart"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Optional

from ..api.exceptions import (
    CallbackError,
    CheckoutError,
    DeployError,
    LayoutError,
    MigrationError,
    ResolutionError,
    RestartError,
    SwitchError,
)
from ..constants import (
    Stage,
    ENV_HOOK_STAGE,
    ENV_HOOK_RELEASE_PATH,
    ENV_HOOK_REVISION,
    ENV_HOOK_DEPLOY_TO,
    ENV_HOOK_SHARED_PATH,
    ENV_HOOK_CURRENT_PATH,
    MSG_ALREADY_DEPLOYED,
    MSG_DEPLOY_SUCCESS,
)
from ..core import CurrentPointer, DeployLayout, ReleaseStore, SharedLinker
from ..executors import CommandExecutor, ShellCommandExecutor
from ..hooks import CallbackPipeline, HookContext, HookStage, TaskRunner
from ..models import DeployConfig, DeployResult, OperationStatus
from ..providers.base import CheckoutProvider

logger = logging.getLogger(__name__)

# Error raised when a stage fails with something that is not a DeployError
STAGE_ERRORS = {
    Stage.RESOLVE_REVISION: lambda msg: ResolutionError(msg),
    Stage.LAYOUT: lambda msg: LayoutError(msg),
    Stage.REUSE_OR_CREATE_RELEASE: lambda msg: CheckoutError(msg),
    Stage.BEFORE_MIGRATE: lambda msg: CallbackError(msg, Stage.BEFORE_MIGRATE),
    Stage.MIGRATE: lambda msg: MigrationError(msg),
    Stage.BEFORE_SYMLINK: lambda msg: CallbackError(msg, Stage.BEFORE_SYMLINK),
    Stage.SWITCH_RELEASE: lambda msg: SwitchError(msg),
    Stage.BEFORE_RESTART: lambda msg: CallbackError(msg, Stage.BEFORE_RESTART),
    Stage.RESTART: lambda msg: RestartError(msg),
    Stage.AFTER_RESTART: lambda msg: CallbackError(msg, Stage.AFTER_RESTART),
}


class DeployService:
    """Runs one deployment per call against a single deploy root

    Stages run strictly in sequence:

        resolve_revision -> check_idempotent -> (no-op | layout ->
        reuse_or_create_release -> pre_migrate_link -> before_migrate ->
        [migrate] -> before_symlink -> switch_release -> before_restart ->
        restart -> after_restart)

    Nothing is rolled back when a stage fails. What earlier stages left on
    disk stays there, and a later run of the same revision reuses it.
    """

    def __init__(self,
                 config: DeployConfig,
                 provider: CheckoutProvider,
                 executor: Optional[CommandExecutor] = None,
                 runner: Optional[TaskRunner] = None):
        """Initialize deploy service

        Args:
            config: Deployment configuration
            provider: Checkout provider for resolution and checkout
            executor: Command executor for migration and restart commands
            runner: Task runner for callbacks
        """
        self.config = config
        self.provider = provider
        self.executor = executor or ShellCommandExecutor(environment=config.environment)

        self.layout = DeployLayout(config.deploy_to)
        self.release_store = ReleaseStore(self.layout, provider)
        self.current_pointer = CurrentPointer(self.layout)
        self.linker = SharedLinker(self.layout, overwrite=config.overwrite_links)
        self.pipeline = CallbackPipeline(
            config.callbacks(),
            runner=runner,
            in_repo_callbacks=config.in_repo_callbacks
        )

        self.last_result: Optional[DeployResult] = None

    def deploy(self, spec: Optional[str] = None, force: Optional[bool] = None) -> DeployResult:
        """Deploy a revision

        Args:
            spec: Revision specifier (defaults to the configured revision)
            force: Run the full pipeline even if the revision is live
                (defaults to the configured flag)

        Returns:
            DeployResult; ``updated`` is False only when nothing was done

        Raises:
            DeployError: Subclass naming the failed stage
        """
        spec = spec or self.config.revision
        force = self.config.force if force is None else force
        result = DeployResult(forced=force)
        self.last_result = result

        try:
            self._run(spec, force, result)
        except DeployError as e:
            result.complete(OperationStatus.FAILED, str(e))
            logger.error(f"Deployment failed during {e.stage_name}: {e}")
            raise

        return result

    def _run(self, spec: str, force: bool, result: DeployResult) -> None:
        with self._stage(Stage.RESOLVE_REVISION, result):
            revision = self.provider.resolve(spec)
            # Reject identifiers that cannot name a release directory
            self.release_store.path_for(revision)
        result.revision = revision

        with self._stage(Stage.CHECK_IDEMPOTENT, result):
            active = self.current_pointer.read()
        result.previous_revision = active

        if active == revision and not force:
            logger.info(MSG_ALREADY_DEPLOYED.format(revision=revision))
            result.release_path = self.layout.release_path(revision)
            result.updated = False
            result.complete(OperationStatus.SKIPPED, "Revision already deployed")
            return

        with self._stage(Stage.LAYOUT, result):
            self.layout.ensure()

        with self._stage(Stage.REUSE_OR_CREATE_RELEASE, result):
            release_path, created = self.release_store.resolve_or_create(revision)
        result.release_path = release_path
        result.release_created = created

        with self._stage(Stage.PRE_MIGRATE_LINK, result):
            self.linker.link_before_migrate(release_path, self.config.symlink_before_migrate)

        self._callback(HookStage.BEFORE_MIGRATE, release_path, revision, result)

        if self.config.migrate:
            with self._stage(Stage.MIGRATE, result):
                self._run_command(Stage.MIGRATE, self.config.migration_command,
                                  release_path, revision)

        self._callback(HookStage.BEFORE_SYMLINK, release_path, revision, result)

        with self._stage(Stage.SWITCH_RELEASE, result):
            self.linker.link_after_switch(
                release_path,
                self.config.symlinks,
                self.config.create_dirs_before_symlink,
                self.config.purge_before_symlink
            )
            self.current_pointer.swap(release_path)

        self._callback(HookStage.BEFORE_RESTART, release_path, revision, result)

        with self._stage(Stage.RESTART, result):
            if self.config.restart_command:
                self._run_command(Stage.RESTART, self.config.restart_command,
                                  release_path, revision)
            else:
                logger.debug("No restart command configured")

        self._callback(HookStage.AFTER_RESTART, release_path, revision, result)

        result.updated = True
        result.complete(OperationStatus.SUCCESS, MSG_DEPLOY_SUCCESS.format(revision=revision))
        logger.info(result.message)

    @contextmanager
    def _stage(self, stage: Stage, result: DeployResult):
        logger.info(f"Entering stage {stage.value}")
        try:
            yield
        except DeployError as e:
            e.stage = stage
            raise
        except Exception as e:
            factory = STAGE_ERRORS.get(stage)
            message = f"{stage.value} failed: {e}"
            error = factory(message) if factory else DeployError(message, stage=stage)
            error.stage = stage
            raise error from e
        result.record_stage(stage.value)

    def _callback(self, hook: HookStage, release_path: Path, revision: str,
                  result: DeployResult) -> None:
        with self._stage(hook.stage, result):
            context = HookContext(
                stage=hook,
                release_path=release_path,
                revision=revision,
                deploy_root=self.layout.deploy_root,
                shared_path=self.layout.shared_dir,
                current_path=self.layout.current_link,
                executor=self.executor,
                environment=dict(self.config.environment)
            )
            self.pipeline.run(hook, context)

    def _run_command(self, stage: Stage, command: str, release_path: Path, revision: str) -> None:
        env = self._command_environment(stage, release_path, revision)
        status = self.executor.run(command, release_path, env)
        if status == 0:
            return

        message = f"{stage.value} command exited with status {status}: {command}"
        if stage == Stage.MIGRATE:
            raise MigrationError(message, exit_status=status)
        raise RestartError(message, exit_status=status)

    def _command_environment(self, stage: Stage, release_path: Path, revision: str) -> Dict[str, str]:
        env = dict(self.config.environment)
        env.update({
            ENV_HOOK_STAGE: stage.value,
            ENV_HOOK_RELEASE_PATH: str(release_path),
            ENV_HOOK_REVISION: revision,
            ENV_HOOK_DEPLOY_TO: str(self.layout.deploy_root),
            ENV_HOOK_SHARED_PATH: str(self.layout.shared_dir),
            ENV_HOOK_CURRENT_PATH: str(self.layout.current_link),
        })
        return env

