"""
Base ssh client interface and the effective configuration map.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Sequence
import logging
import re

logger = logging.getLogger(__name__)

# Exit status of a client terminated by Control-C
INTERRUPTED_EXIT_CODE = 130

_KEY_VALUE = re.compile(r"(\S+)(?:\s+(.*))?")


class ConfigurationMap:
    """
    Effective ssh configuration: option name to ordered values.

    Repeated options (``identityfile``, ``localforward``...) keep every value
    in the order the dump printed them.
    """

    def __init__(self, entries: Optional[Dict[str, List[str]]] = None):
        self._entries: Dict[str, List[str]] = {
            key: list(values) for key, values in (entries or {}).items()
        }

    @classmethod
    def parse(cls, text: str) -> "ConfigurationMap":
        """
        Parse ``ssh -G`` output.

        Each line is split on the first run of whitespace into a key and the
        rest of the line as value. Blank lines are skipped.

        Args:
            text: Raw standard output of the dump

        Returns:
            Parsed configuration map
        """
        entries: Dict[str, List[str]] = {}
        for line in text.splitlines():
            match = _KEY_VALUE.match(line.strip())
            if not match:
                continue
            key, value = match.group(1), match.group(2) or ""
            entries.setdefault(key, []).append(value.rstrip())
        return cls(entries)

    def get_all(self, key: str) -> List[str]:
        return list(self._entries.get(key, []))

    def get_first(self, key: str) -> Optional[str]:
        values = self._entries.get(key)
        return values[0] if values else None

    def keys(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ConfigurationMap({self._entries!r})"


class SSHClient(ABC):
    """Narrow capability interface over an ssh client executable."""

    @abstractmethod
    def dump_configuration(self, args: Sequence[str]) -> ConfigurationMap:
        """
        Resolve the effective configuration for an argument vector.

        Args:
            args: Original command-line arguments, unmodified

        Returns:
            Effective configuration map

        Raises:
            ConfigurationError: If the client cannot produce its configuration
        """
        pass

    @abstractmethod
    def connect(self, args: Sequence[str]) -> int:
        """
        Run the real session with inherited standard streams.

        Args:
            args: Original command-line arguments, unmodified

        Returns:
            Exit status of the client

        Raises:
            ConnectionFailed: If the client cannot be started
        """
        pass
