"""
Data models package.
"""
from ec2ssh.models.target import ConnectionTarget, CredentialFile, CloudInstanceRef
from ec2ssh.models.sweep import SweepOutcome, SweepResult

__all__ = [
    "ConnectionTarget",
    "CredentialFile",
    "CloudInstanceRef",
    "SweepOutcome",
    "SweepResult",
]
