"""Global constants for deploy-revision"""

from enum import Enum

APP_NAME = "deploy-revision"
LOG_FORMAT = "%(message)s"

# Configuration
DEFAULT_CONFIG_FILE = "deploy-revision.yaml"
DEFAULT_REVISION = "HEAD"
DEFAULT_REMOTE = "origin"
DEFAULT_DEPLOY_BRANCH = "deploy"

# Directory structure under deploy_to
RELEASES_DIR = "releases"
SHARED_DIR = "shared"
CURRENT_LINK_NAME = "current"
TEMP_LINK_SUFFIX = ".tmp"
IN_REPO_CALLBACK_DIR = "deploy"
IN_REPO_CALLBACK_EXTENSIONS = ["", ".sh", ".py"]

# Shared-resource defaults
DEFAULT_SYMLINK_BEFORE_MIGRATE = {}
DEFAULT_SYMLINKS = {
    "system": "public/system",
    "pids": "tmp/pids",
    "log": "log",
}
DEFAULT_CREATE_DIRS_BEFORE_SYMLINK = ["tmp", "public", "config"]
DEFAULT_PURGE_BEFORE_SYMLINK = ["log", "tmp/pids", "public/system"]


class Stage(Enum):
    """Orchestrator states that can fail an invocation"""
    CONFIGURATION = "configuration"
    RESOLVE_REVISION = "resolve_revision"
    CHECK_IDEMPOTENT = "check_idempotent"
    LAYOUT = "layout"
    REUSE_OR_CREATE_RELEASE = "reuse_or_create_release"
    PRE_MIGRATE_LINK = "pre_migrate_link"
    BEFORE_MIGRATE = "before_migrate"
    MIGRATE = "migrate"
    BEFORE_SYMLINK = "before_symlink"
    SWITCH_RELEASE = "switch_release"
    BEFORE_RESTART = "before_restart"
    RESTART = "restart"
    AFTER_RESTART = "after_restart"


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "DR001"
    LAYOUT_INVALID = "DR002"
    RESOLUTION_FAILED = "DR010"
    CHECKOUT_FAILED = "DR011"
    LINK_CONFLICT = "DR012"
    CALLBACK_FAILED = "DR013"
    MIGRATION_FAILED = "DR014"
    SWITCH_FAILED = "DR015"
    RESTART_FAILED = "DR016"


# Environment variables
ENV_CONFIG_PATH = "DEPLOY_REVISION_CONFIG"
ENV_DEPLOY_TO = "DEPLOY_REVISION_DEPLOY_TO"
ENV_LOG_LEVEL = "DEPLOY_REVISION_LOG_LEVEL"

# Variables exported to commands and in-repo callback scripts
ENV_HOOK_STAGE = "DEPLOY_REVISION_STAGE"
ENV_HOOK_RELEASE_PATH = "DEPLOY_REVISION_RELEASE_PATH"
ENV_HOOK_REVISION = "DEPLOY_REVISION_REVISION"
ENV_HOOK_DEPLOY_TO = "DEPLOY_REVISION_ROOT"
ENV_HOOK_SHARED_PATH = "DEPLOY_REVISION_SHARED_PATH"
ENV_HOOK_CURRENT_PATH = "DEPLOY_REVISION_CURRENT_PATH"

# Validation
FULL_SHA_LENGTH = 40

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_INFO = "ℹ"
EMOJI_ARROW = "→"
EMOJI_LINK = "🔗"

# Messages templates
MSG_DEPLOY_SUCCESS = f"{EMOJI_SUCCESS} Deployed revision {{revision}}"
MSG_ALREADY_DEPLOYED = f"{EMOJI_INFO} Revision {{revision}} is already deployed, nothing to do"
MSG_LINK_UPDATED = f"{EMOJI_LINK} Link updated: {{link}} {EMOJI_ARROW} {{target}}"
