"""
OpenSSH client driven through the system ``ssh`` binary.
"""
import logging
import subprocess
from typing import List, Optional, Sequence

from ec2ssh.core.deadline import Deadline
from ec2ssh.core.exceptions import ConfigurationError, ConnectionFailed, DeadlineExceeded
from ec2ssh.services.ssh.base import ConfigurationMap, SSHClient

logger = logging.getLogger(__name__)


class OpenSSHClient(SSHClient):
    """Thin wrapper around the system ssh binary."""

    def __init__(self, binary: str = "ssh", deadline: Optional[Deadline] = None):
        """
        Initialize the client.

        Args:
            binary: ssh executable name or path
            deadline: Deadline bounding the configuration dump
        """
        self.binary = binary
        self.deadline = deadline or Deadline()

    def _command(self, args: Sequence[str]) -> List[str]:
        return [self.binary, *args]

    def dump_configuration(self, args: Sequence[str]) -> ConfigurationMap:
        cmd = self._command(["-G", *args])
        logger.debug(f"Resolving effective ssh configuration: {cmd}")
        self.deadline.check("the ssh configuration dump")

        # stdin and stderr stay attached to the terminal
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                text=True,
                timeout=self.deadline.remaining(),
            )
        except subprocess.TimeoutExpired as e:
            raise DeadlineExceeded(f"{self.binary} -G did not finish in time") from e
        except OSError as e:
            raise ConfigurationError(f"cannot run {self.binary}: {e}") from e

        if result.returncode != 0:
            raise ConfigurationError(
                f"{self.binary} -G exited with status {result.returncode}"
            )

        options = ConfigurationMap.parse(result.stdout or "")
        logger.debug(f"ssh configuration has {len(options)} options")
        return options

    def connect(self, args: Sequence[str]) -> int:
        cmd = self._command(args)
        logger.debug(f"Starting ssh session: {cmd}")
        try:
            proc = subprocess.Popen(cmd)
        except OSError as e:
            raise ConnectionFailed(f"error while connecting to the instance: {e}") from e

        with proc:
            try:
                return proc.wait()
            except KeyboardInterrupt:
                # The interrupt reached the whole process group; ssh decides
                # how to exit.
                return proc.wait()
