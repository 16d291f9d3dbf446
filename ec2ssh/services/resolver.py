"""
Hostname resolution for the connection target.
"""
import logging
import socket

from ec2ssh.core.exceptions import ResolutionError

logger = logging.getLogger(__name__)


def resolve_address(hostname: str) -> str:
    """
    Resolve a hostname to a single address.

    The first address returned by the system resolver is used, whatever its
    family. No reachability check is made.

    Args:
        hostname: Hostname from the effective ssh configuration

    Returns:
        Address as a string (IPv4 dotted quad or IPv6)

    Raises:
        ResolutionError: If the hostname cannot be resolved
    """
    try:
        infos = socket.getaddrinfo(hostname, None)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError(f"cannot resolve {hostname}: {e}") from e

    if not infos:
        raise ResolutionError(f"cannot resolve {hostname}: no addresses returned")

    address = infos[0][4][0]
    logger.debug(f"Resolved {hostname} to {address}")
    return address
