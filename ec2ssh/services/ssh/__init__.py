"""
ssh client helpers.

The system ssh binary is used both to resolve the effective configuration
(``ssh -G``) and to run the real session, so aliases, includes and
command-line flags behave exactly as they do for plain ssh.
"""
from ec2ssh.services.ssh.base import ConfigurationMap, SSHClient, INTERRUPTED_EXIT_CODE
from ec2ssh.services.ssh.openssh import OpenSSHClient

__all__ = [
    "ConfigurationMap",
    "SSHClient",
    "OpenSSHClient",
    "INTERRUPTED_EXIT_CODE",
]
