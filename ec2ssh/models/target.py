"""
Connection target, local credential and cloud instance models.
"""
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ConnectionTarget(BaseModel):
    """Remote user and host taken from the effective ssh configuration."""

    model_config = ConfigDict(frozen=True)

    remote_user: str = Field(min_length=1)
    hostname: str = Field(min_length=1)
    resolved_address: Optional[str] = None

    def with_address(self, address: str) -> "ConnectionTarget":
        """
        Return a copy carrying the resolved address.

        Raises:
            ValueError: If this target already has an address
        """
        if self.resolved_address is not None:
            raise ValueError(
                f"address for {self.hostname} already resolved to {self.resolved_address}"
            )
        return self.model_copy(update={"resolved_address": address})


class CredentialFile(BaseModel):
    """Private key path plus its implied public half."""

    model_config = ConfigDict(frozen=True)

    private_path: Path

    @property
    def public_path(self) -> Path:
        return Path(f"{self.private_path}.pub")


class CloudInstanceRef(BaseModel):
    """Handle to an EC2 instance found in one region."""

    model_config = ConfigDict(frozen=True)

    instance_id: str
    private_address: str
    region: str
    availability_zone: Optional[str] = None
