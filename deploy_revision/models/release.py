# deploy_revision/models/release.py
"""Release models for the deployment tool"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class ReleaseInfo:
    """A release directory found on disk"""
    revision: str
    path: Path
    is_current: bool = False
    created_at: Optional[datetime] = None

    @property
    def short_revision(self) -> str:
        """Abbreviated revision for display"""
        return self.revision[:12]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'revision': self.revision,
            'path': str(self.path),
            'is_current': self.is_current,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class DeploymentStatus:
    """What is live under a deploy root"""
    deploy_to: str
    current_revision: Optional[str] = None
    current_target: Optional[str] = None
    release_count: int = 0
    issues: List[str] = field(default_factory=list)

    @property
    def is_deployed(self) -> bool:
        return self.current_revision is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'deploy_to': self.deploy_to,
            'current_revision': self.current_revision,
            'current_target': self.current_target,
            'release_count': self.release_count,
            'issues': list(self.issues),
        }
