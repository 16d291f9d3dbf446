"""
Outcome of a region sweep.
"""
import enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ec2ssh.models.target import CloudInstanceRef


class SweepOutcome(str, enum.Enum):
    """Terminal states of a region sweep."""
    PROVISIONED = "provisioned"  # key pushed to an instance
    EXHAUSTED = "exhausted"  # no region knows the address
    FAILED = "failed"  # hard error, no connection attempt


class SweepResult(BaseModel):
    """Result of one sweep over the candidate regions."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    outcome: SweepOutcome
    regions_visited: List[str] = Field(default_factory=list)
    instance: Optional[CloudInstanceRef] = None
    error: Optional[Exception] = None

    @property
    def should_connect(self) -> bool:
        return self.outcome is not SweepOutcome.FAILED

    def raise_for_failure(self) -> None:
        """Re-raise the captured error if the sweep failed."""
        if self.outcome is SweepOutcome.FAILED and self.error is not None:
            raise self.error
