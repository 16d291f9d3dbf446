"""
Overarching deadline for the provisioning phase.
"""
import time
from typing import Optional

from ec2ssh.core.exceptions import DeadlineExceeded


class Deadline:
    """A monotonic-clock deadline; ``seconds=None`` never expires."""

    def __init__(self, seconds: Optional[float] = None, clock=time.monotonic):
        self._clock = clock
        self.seconds = seconds
        self.expires_at = None if seconds is None else clock() + seconds

    @property
    def unbounded(self) -> bool:
        return self.expires_at is None

    def remaining(self) -> Optional[float]:
        """Seconds left, clamped at zero, or None when unbounded."""
        if self.unbounded:
            return None
        return max(0.0, self.expires_at - self._clock())

    def check(self, step: str) -> None:
        """
        Raise if the deadline has passed.

        Args:
            step: Name of the step about to start, used in the error message

        Raises:
            DeadlineExceeded: If no time is left
        """
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise DeadlineExceeded(f"deadline of {self.seconds}s exceeded before {step}")

    def cap(self, timeout: float) -> float:
        """Return ``timeout`` reduced to the time left, if that is shorter."""
        remaining = self.remaining()
        if remaining is None:
            return timeout
        return min(timeout, remaining)
