"""
EC2 fleet backend (DescribeInstances, DescribeInstanceStatus and EC2 Instance
Connect SendSSHPublicKey).
"""
from typing import Optional, Any

from botocore.exceptions import BotoCoreError, ClientError

from ec2ssh.core.deadline import Deadline
from ec2ssh.core.exceptions import (
    InventoryQueryFailed,
    InstanceStatusFailed,
    KeyInjectionFailed,
)
from ec2ssh.models import CloudInstanceRef
from ec2ssh.services.cloud.base import FleetBackend

PRIVATE_IP_FILTER = "private-ip-address"


class EC2Fleet(FleetBackend):
    """One EC2 region, reached through an ec2 and an ec2-instance-connect client."""

    def __init__(
        self,
        region: str,
        ec2_client: Any,
        connect_client: Any,
        deadline: Optional[Deadline] = None
    ):
        """
        Initialize the EC2 backend.

        Args:
            region: AWS region name
            ec2_client: boto3 ``ec2`` client for the region
            connect_client: boto3 ``ec2-instance-connect`` client for the region
            deadline: Deadline checked before every API call
        """
        super().__init__(region)
        self.ec2 = ec2_client
        self.connect = connect_client
        self.deadline = deadline or Deadline()

    def find_instance(self, address: str) -> Optional[CloudInstanceRef]:
        self.deadline.check(f"querying {self.region}")
        try:
            response = self.ec2.describe_instances(
                Filters=[{"Name": PRIVATE_IP_FILTER, "Values": [address]}]
            )
        except (ClientError, BotoCoreError) as e:
            self.logger.error(f"Failed to query EC2 instances in {self.region}: {e}")
            raise InventoryQueryFailed(f"cannot contact with AWS API in {self.region}: {e}") from e

        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                if instance.get("PrivateIpAddress") != address:
                    continue
                ref = CloudInstanceRef(
                    instance_id=instance["InstanceId"],
                    private_address=address,
                    region=self.region,
                    availability_zone=instance.get("Placement", {}).get("AvailabilityZone"),
                )
                self.logger.info(f"Found instance {ref.instance_id} for {address} in {self.region}")
                return ref

        self.logger.debug(f"No instance with private address {address} in {self.region}")
        return None

    def instance_zone(self, instance: CloudInstanceRef) -> str:
        self.deadline.check(f"fetching the status of {instance.instance_id}")
        try:
            response = self.ec2.describe_instance_status(InstanceIds=[instance.instance_id])
        except (ClientError, BotoCoreError) as e:
            self.logger.error(f"Failed to get status of {instance.instance_id}: {e}")
            raise InstanceStatusFailed(f"cannot get the instance status: {e}") from e

        statuses = response.get("InstanceStatuses", [])
        if not statuses:
            raise InstanceStatusFailed(
                f"cannot get the instance status: no status returned for "
                f"{instance.instance_id} (is it running?)"
            )

        zone = statuses[0].get("AvailabilityZone")
        if not zone:
            raise InstanceStatusFailed(
                f"cannot get the instance status: no availability zone for {instance.instance_id}"
            )
        return zone

    def send_public_key(
        self,
        instance: CloudInstanceRef,
        availability_zone: str,
        os_user: str,
        public_key: str
    ) -> bool:
        self.deadline.check(f"pushing the public key to {instance.instance_id}")
        try:
            response = self.connect.send_ssh_public_key(
                InstanceId=instance.instance_id,
                InstanceOSUser=os_user,
                SSHPublicKey=public_key,
                AvailabilityZone=availability_zone,
            )
        except (ClientError, BotoCoreError) as e:
            self.logger.error(f"Failed to send public key to {instance.instance_id}: {e}")
            raise KeyInjectionFailed(f"cannot upload the public key: {e}") from e

        return response.get("Success") is True
