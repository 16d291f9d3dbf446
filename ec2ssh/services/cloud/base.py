"""
Base fleet backend interface.
"""
from abc import ABC, abstractmethod
from typing import Optional
import logging

from ec2ssh.models import CloudInstanceRef

logger = logging.getLogger(__name__)


class FleetBackend(ABC):
    """Abstract base class for one region of a cloud compute fleet."""

    def __init__(self, region: str):
        """
        Initialize the backend.

        Args:
            region: Region this backend is scoped to
        """
        self.region = region
        self.logger = logger

    @abstractmethod
    def find_instance(self, address: str) -> Optional[CloudInstanceRef]:
        """
        Find the instance whose private address equals ``address``.

        Args:
            address: Resolved address of the connection target

        Returns:
            The first matching instance, or None if this region has none

        Raises:
            InventoryQueryFailed: If the inventory cannot be queried
        """
        pass

    @abstractmethod
    def instance_zone(self, instance: CloudInstanceRef) -> str:
        """
        Fetch the availability zone from the instance status.

        Raises:
            InstanceStatusFailed: If the status is missing or cannot be fetched
        """
        pass

    @abstractmethod
    def send_public_key(
        self,
        instance: CloudInstanceRef,
        availability_zone: str,
        os_user: str,
        public_key: str
    ) -> bool:
        """
        Push a public key for ``os_user`` to the instance.

        Returns:
            The success flag reported by the provider

        Raises:
            KeyInjectionFailed: If the call itself fails
        """
        pass
