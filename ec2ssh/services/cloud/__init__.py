"""
Fleet backend factory and exports.
"""
from typing import Callable, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from ec2ssh.core.config import Settings
from ec2ssh.core.deadline import Deadline
from ec2ssh.core.exceptions import CloudError
from ec2ssh.services.cloud.base import FleetBackend
from ec2ssh.services.cloud.ec2 import EC2Fleet

BackendFactory = Callable[[str], FleetBackend]


def create_backend_factory(
    settings: Settings,
    deadline: Optional[Deadline] = None,
    session: Optional[boto3.session.Session] = None
) -> BackendFactory:
    """
    Build a factory producing one EC2 backend per region.

    Clients are created lazily, one pair per region, and never shared between
    regions.

    Args:
        settings: Application settings (profile, timeouts, attempts)
        deadline: Deadline capping the botocore timeouts and checked before
            every API call
        session: boto3 session to use instead of a new one

    Returns:
        Callable mapping a region name to a fleet backend

    Raises:
        CloudError: If the AWS session cannot be set up
    """
    deadline = deadline or Deadline()
    if session is None:
        try:
            session = boto3.session.Session(profile_name=settings.AWS_PROFILE)
        except BotoCoreError as e:
            raise CloudError(f"cannot get config for AWS: {e}") from e

    def create_fleet_backend(region: str) -> FleetBackend:
        deadline.check(f"querying {region}")
        client_config = Config(
            connect_timeout=deadline.cap(settings.AWS_CONNECT_TIMEOUT),
            read_timeout=deadline.cap(settings.AWS_READ_TIMEOUT),
            retries={"mode": "standard", "total_max_attempts": settings.AWS_MAX_ATTEMPTS},
        )
        try:
            ec2_client = session.client("ec2", region_name=region, config=client_config)
            connect_client = session.client("ec2-instance-connect", region_name=region, config=client_config)
        except BotoCoreError as e:
            raise CloudError(f"cannot get config for AWS: {e}") from e
        return EC2Fleet(region, ec2_client, connect_client, deadline)

    return create_fleet_backend


__all__ = [
    "BackendFactory",
    "FleetBackend",
    "EC2Fleet",
    "create_backend_factory",
]
