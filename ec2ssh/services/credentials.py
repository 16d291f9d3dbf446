"""
Local identity file lookup.

Finds the first identity file ssh would offer and reads its public half,
which is what gets pushed to the instance.
"""
import logging
from pathlib import Path
from typing import Iterable

from ec2ssh.core.exceptions import (
    CredentialError,
    NoCredentialFound,
    PublicKeyUnreadable,
    KEY_GUIDANCE,
)
from ec2ssh.models import CredentialFile

logger = logging.getLogger(__name__)


def expand_home(path: str) -> str:
    """
    Expand a leading ``~`` to the invoking user's home directory.

    Args:
        path: Path as printed by ``ssh -G``

    Returns:
        Expanded path, or the input unchanged when it does not start with ``~``

    Raises:
        CredentialError: If the home directory cannot be determined
    """
    if not path.startswith("~"):
        return path
    try:
        return str(Path(path).expanduser())
    except RuntimeError as e:
        raise CredentialError(f"cannot expand {path}: {e}") from e


def find_existing_key(paths: Iterable[str]) -> CredentialFile:
    """
    Return the first candidate identity file that exists.

    Args:
        paths: Candidate private key paths, in ssh's order

    Returns:
        The first existing credential file

    Raises:
        NoCredentialFound: If none of the candidates exist
    """
    candidates = list(paths)
    for candidate in candidates:
        path = Path(expand_home(candidate))
        if not path.exists():
            logger.debug(f"Identity file not found: {path}")
            continue
        logger.debug(f"Using identity file: {path}")
        return CredentialFile(private_path=path)

    raise NoCredentialFound(
        f"cannot find any ssh key (tried: {', '.join(candidates) or 'none'}). {KEY_GUIDANCE}"
    )


def read_public_key(credential: CredentialFile) -> str:
    """
    Read the public half of an identity file.

    Raises:
        PublicKeyUnreadable: If ``<private path>.pub`` cannot be read
    """
    try:
        return credential.public_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read {credential.public_path}: {e}")
        raise PublicKeyUnreadable(
            f"cannot read the public key {credential.public_path}. {KEY_GUIDANCE}"
        ) from e
