"""
Command-line entry point.

``ec2-ssh`` takes exactly the arguments of ``ssh``. Before connecting it finds
the EC2 instance behind the target address and pushes the local public key
through EC2 Instance Connect, then runs ssh with the arguments unchanged.
"""
import logging
import sys
from typing import Callable, List, Optional, Sequence

from ec2ssh.core.config import Settings, get_settings
from ec2ssh.core.deadline import Deadline
from ec2ssh.core.exceptions import ConfigurationError, ConnectionFailed, Ec2SshError
from ec2ssh.core.logging_handler import setup_logging, setup_file_logging
from ec2ssh.models import ConnectionTarget, SweepResult
from ec2ssh.services.cloud import BackendFactory, create_backend_factory
from ec2ssh.services.credentials import find_existing_key, read_public_key
from ec2ssh.services.provisioning import RegionSweep
from ec2ssh.services.resolver import resolve_address
from ec2ssh.services.ssh import ConfigurationMap, INTERRUPTED_EXIT_CODE, OpenSSHClient, SSHClient

logger = logging.getLogger(__name__)


def connection_target(options: ConfigurationMap) -> ConnectionTarget:
    """Build the connection target from the effective configuration."""
    user = options.get_first("user")
    hostname = options.get_first("hostname")
    if not user or not hostname:
        missing = [key for key, value in (("user", user), ("hostname", hostname)) if not value]
        raise ConfigurationError(f"ssh configuration has no {' or '.join(missing)}")
    return ConnectionTarget(remote_user=user, hostname=hostname)


def provision(
    args: Sequence[str],
    ssh_client: SSHClient,
    sweep: RegionSweep,
    resolve: Callable[[str], str] = resolve_address
) -> SweepResult:
    """
    Run everything that happens before the connection.

    Args:
        args: Original ssh arguments
        ssh_client: Client used for the configuration dump
        sweep: Region sweep to run
        resolve: Hostname resolver

    Returns:
        Sweep result; a failed sweep is returned, not raised

    Raises:
        ConfigurationError: If the effective configuration is unusable
        CredentialError: If no usable key is found
        ResolutionError: If the hostname cannot be resolved
    """
    options = ssh_client.dump_configuration(args)
    target = connection_target(options)

    # Local key first: a missing key must abort before any network activity
    credential = find_existing_key(options.get_all("identityfile"))
    public_key = read_public_key(credential)

    target = target.with_address(resolve(target.hostname))
    logger.debug(
        f"Target {target.remote_user}@{target.hostname} ({target.resolved_address}), "
        f"key {credential.public_path}"
    )
    return sweep.run(target, public_key)


def run(
    args: Sequence[str],
    settings: Optional[Settings] = None,
    ssh_client: Optional[SSHClient] = None,
    backend_factory: Optional[BackendFactory] = None,
    resolve: Callable[[str], str] = resolve_address
) -> int:
    """
    Provision, then connect.

    Returns:
        Process exit code (0 on success or when ssh was interrupted)

    Raises:
        Ec2SshError: On any fatal condition
    """
    settings = settings or get_settings()
    deadline = Deadline(settings.DEADLINE_SECONDS)
    ssh_client = ssh_client or OpenSSHClient(settings.SSH_BINARY, deadline=deadline)

    def lazy_backend_factory(region: str):
        nonlocal backend_factory
        if backend_factory is None:
            backend_factory = create_backend_factory(settings, deadline)
        return backend_factory(region)

    sweep = RegionSweep(settings.REGIONS, lazy_backend_factory, deadline=deadline)
    result = provision(args, ssh_client, sweep, resolve)
    if not result.should_connect:
        result.raise_for_failure()
    logger.info(f"Provisioning {result.outcome.value} after {', '.join(result.regions_visited)}")

    exit_code = ssh_client.connect(args)
    if exit_code in (0, INTERRUPTED_EXIT_CODE):
        return 0
    raise ConnectionFailed(f"error while connecting to the instance: ssh exited with status {exit_code}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run ec2-ssh and return the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = get_settings()
    except ValueError as e:
        print(f"invalid ec2-ssh settings: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.LOG_LEVEL)
    setup_file_logging(settings.LOG_FILE, settings.LOG_MAX_BYTES, settings.LOG_BACKUP_COUNT)

    try:
        return run(args, settings=settings)
    except Ec2SshError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        print(e, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return INTERRUPTED_EXIT_CODE


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
