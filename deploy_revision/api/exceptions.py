"""Exception definitions for deploy-revision API"""

from typing import Optional

from ..constants import ErrorCode, Stage


class DeployRevisionError(Exception):
    """Base exception for deploy-revision"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(DeployRevisionError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class DeployError(DeployRevisionError):
    """A deployment invocation failed

    Carries the name of the stage that failed. The underlying cause, when
    there is one, is chained as ``__cause__``.
    """

    default_stage: Optional[Stage] = None

    def __init__(self, message: str, error_code: str = None, stage: Optional[Stage] = None):
        super().__init__(message, error_code)
        self.stage = stage or self.default_stage

    @property
    def stage_name(self) -> str:
        return self.stage.value if self.stage else "unknown"

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__


class LayoutError(DeployError):
    """Deploy directory layout cannot be created or is invalid"""

    default_stage = Stage.LAYOUT

    def __init__(self, message: str, path: str = None):
        super().__init__(message, ErrorCode.LAYOUT_INVALID)
        self.path = path


class ResolutionError(DeployError):
    """Revision specifier could not be resolved"""

    default_stage = Stage.RESOLVE_REVISION

    def __init__(self, message: str, spec: str = None):
        super().__init__(message, ErrorCode.RESOLUTION_FAILED)
        self.spec = spec


class CheckoutError(DeployError):
    """Release tree could not be materialized"""

    default_stage = Stage.REUSE_OR_CREATE_RELEASE

    def __init__(self, message: str, revision: str = None, destination: str = None):
        super().__init__(message, ErrorCode.CHECKOUT_FAILED)
        self.revision = revision
        self.destination = destination


class LinkConflictError(DeployError):
    """Shared-resource target exists and is incompatible with the link"""

    default_stage = Stage.SWITCH_RELEASE

    def __init__(self, path: str, reason: str = None):
        message = f"Link target conflicts with existing path: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorCode.LINK_CONFLICT)
        self.path = path


class CallbackError(DeployError):
    """A lifecycle hook failed"""

    def __init__(self, message: str, stage: Stage = None):
        super().__init__(message, ErrorCode.CALLBACK_FAILED, stage)


class MigrationError(DeployError):
    """Migration command exited with a non-zero status"""

    default_stage = Stage.MIGRATE

    def __init__(self, message: str, exit_status: int = None):
        super().__init__(message, ErrorCode.MIGRATION_FAILED)
        self.exit_status = exit_status


class SwitchError(DeployError):
    """The current pointer could not be repointed"""

    default_stage = Stage.SWITCH_RELEASE

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.SWITCH_FAILED)


class RestartError(DeployError):
    """Restart command exited with a non-zero status"""

    default_stage = Stage.RESTART

    def __init__(self, message: str, exit_status: int = None):
        super().__init__(message, ErrorCode.RESTART_FAILED)
        self.exit_status = exit_status
