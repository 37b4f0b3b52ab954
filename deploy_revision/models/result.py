"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    IN_PROGRESS = "in_progress"


@dataclass
class DeployResult:
    """Outcome of one deployment invocation

    ``updated`` is False only for the no-op path, where the requested
    revision was already live and nothing was touched.
    """

    revision: Optional[str] = None
    updated: bool = False
    status: OperationStatus = OperationStatus.IN_PROGRESS
    message: str = ""
    release_path: Optional[Path] = None
    previous_revision: Optional[str] = None
    release_created: bool = False
    forced: bool = False
    stages: List[str] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status in (OperationStatus.SUCCESS, OperationStatus.SKIPPED)

    @property
    def reused_release(self) -> bool:
        """True when an existing release directory was switched to"""
        return self.updated and not self.release_created

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def record_stage(self, stage: str) -> None:
        self.stages.append(stage)

    def complete(self, status: OperationStatus, message: str = None) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()
        self.status = status
        if message is not None:
            self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "revision": self.revision,
            "updated": self.updated,
            "status": self.status.value,
            "message": self.message,
            "release_path": str(self.release_path) if self.release_path else None,
            "previous_revision": self.previous_revision,
            "release_created": self.release_created,
            "forced": self.forced,
            "stages": list(self.stages),
            "duration": self.duration,
        }
