"""
Exception hierarchy for the connection flow.

Every fatal condition is raised as an ``Ec2SshError`` subclass and reported
once by the entry point.
"""

KEY_GUIDANCE = "If you want to provide a custom key location, use the `-i` parameter."


class Ec2SshError(Exception):
    """Base exception for ec2-ssh."""
    pass


class ConfigurationError(Ec2SshError):
    """Exception raised when ssh cannot produce its effective configuration."""
    pass


class CredentialError(Ec2SshError):
    """Exception raised when the local key material cannot be used."""
    pass


class NoCredentialFound(CredentialError):
    """Exception raised when none of the candidate identity files exist."""
    pass


class PublicKeyUnreadable(CredentialError):
    """Exception raised when the public half of an identity file cannot be read."""
    pass


class ResolutionError(Ec2SshError):
    """Exception raised when the target hostname cannot be resolved."""
    pass


class CloudError(Ec2SshError):
    """Base exception for EC2 and EC2 Instance Connect failures."""
    pass


class InventoryQueryFailed(CloudError):
    """Exception raised when the instance inventory cannot be queried."""
    pass


class InstanceStatusFailed(CloudError):
    """Exception raised when the instance status cannot be fetched."""
    pass


class KeyInjectionFailed(CloudError):
    """Exception raised when the public key upload call fails."""
    pass


class KeyInjectionRejected(CloudError):
    """Exception raised when the public key upload reports no success."""
    pass


class ConnectionFailed(Ec2SshError):
    """Exception raised when the ssh session cannot be started or fails."""
    pass


class DeadlineExceeded(Ec2SshError):
    """Exception raised when provisioning runs past its deadline."""
    pass
