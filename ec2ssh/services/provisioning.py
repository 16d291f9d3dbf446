"""
Ephemeral key provisioning across candidate regions.

The sweep visits regions in their configured order and stops at the first
region that knows the target address. A region without a match is not an
error; any cloud failure ends the sweep and blocks the connection.
"""
import logging
from typing import Iterable, List, Optional

from ec2ssh.core.deadline import Deadline
from ec2ssh.core.exceptions import Ec2SshError, KeyInjectionRejected
from ec2ssh.models import CloudInstanceRef, ConnectionTarget, SweepOutcome, SweepResult
from ec2ssh.services.cloud import BackendFactory
from ec2ssh.services.cloud.base import FleetBackend

logger = logging.getLogger(__name__)


class CredentialProvisioner:
    """Push a public key to one found instance."""

    def __init__(self, deadline: Optional[Deadline] = None):
        self.deadline = deadline or Deadline()

    def provision(
        self,
        backend: FleetBackend,
        instance: CloudInstanceRef,
        public_key: str,
        os_user: str
    ) -> CloudInstanceRef:
        """
        Fetch the instance's zone and push the public key for ``os_user``.

        Args:
            backend: Backend for the region the instance was found in
            instance: Instance to push to
            public_key: Public key text
            os_user: OS user the key is authorized for

        Returns:
            The instance, carrying the zone used for the push

        Raises:
            InstanceStatusFailed: If the zone cannot be determined
            KeyInjectionFailed: If the push call fails
            DeadlineExceeded: If the deadline passes between calls
            KeyInjectionRejected: If the push call reports no success
        """
        self.deadline.check(f"fetching the status of {instance.instance_id}")
        zone = backend.instance_zone(instance)
        logger.debug(f"Pushing public key for {os_user} to {instance.instance_id} ({zone})")
        self.deadline.check(f"pushing the public key to {instance.instance_id}")

        if not backend.send_public_key(instance, zone, os_user, public_key):
            raise KeyInjectionRejected(
                f"unsuccessful upload of the public key to {instance.instance_id}"
            )

        logger.info(f"Public key for {os_user} pushed to {instance.instance_id} in {zone}")
        return instance.model_copy(update={"availability_zone": zone})


class RegionSweep:
    """Ordered, stop-on-success traversal of candidate regions."""

    def __init__(
        self,
        regions: Iterable[str],
        backend_factory: BackendFactory,
        provisioner: Optional[CredentialProvisioner] = None,
        deadline: Optional[Deadline] = None
    ):
        """
        Initialize the sweep.

        Args:
            regions: Candidate regions in the order they are tried; repeated
                entries are dropped
            backend_factory: Maps a region name to a fleet backend
            provisioner: Key pusher used once an instance is found
            deadline: Deadline checked before each region and shared with
                the default provisioner
        """
        self.regions: List[str] = list(dict.fromkeys(regions))
        self.backend_factory = backend_factory
        self.deadline = deadline or Deadline()
        self.provisioner = provisioner or CredentialProvisioner(self.deadline)

    def run(self, target: ConnectionTarget, public_key: str) -> SweepResult:
        """
        Sweep the regions for the target's address and push the key.

        Args:
            target: Connection target with its resolved address
            public_key: Public key text to push

        Returns:
            PROVISIONED, EXHAUSTED, or FAILED with the error attached
        """
        if target.resolved_address is None:
            raise ValueError(f"{target.hostname} has no resolved address")

        visited: List[str] = []
        for region in self.regions:
            visited.append(region)
            try:
                self.deadline.check(f"querying {region}")
                backend = self.backend_factory(region)
                instance = backend.find_instance(target.resolved_address)
                if instance is None:
                    continue
                instance = self.provisioner.provision(
                    backend, instance, public_key, target.remote_user
                )
            except Ec2SshError as e:
                logger.debug(f"Sweep failed in {region}: {e}")
                return SweepResult(
                    outcome=SweepOutcome.FAILED,
                    regions_visited=visited,
                    error=e,
                )
            return SweepResult(
                outcome=SweepOutcome.PROVISIONED,
                regions_visited=visited,
                instance=instance,
            )

        logger.info(
            f"No instance with address {target.resolved_address} in {', '.join(visited)}; "
            "connecting without provisioning"
        )
        return SweepResult(outcome=SweepOutcome.EXHAUSTED, regions_visited=visited)
