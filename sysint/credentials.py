"""Default credential generation from the calling process identity."""

import os
import socket
import time
from typing import Optional

from common.constants import CREDENTIAL_TIMEOUT_SECONDS
from common.exceptions import IdentityUnavailableError
from common.logging_config import get_logger
from common.types import Credential

logger = get_logger(__name__)


def default_credential(timeout: int = CREDENTIAL_TIMEOUT_SECONDS, now: Optional[float] = None) -> Credential:
    """
    Build a credential for the effective user of this process.

    The effective gid leads the group list, followed by the
    supplementary groups with duplicates removed.

    Args:
        timeout: Credential lifetime in seconds
        now: Issue time (defaults to the current time)

    Returns:
        Credential instance

    Raises:
        IdentityUnavailableError: If the platform cannot report identity
    """
    try:
        user_id = os.geteuid()
        primary_gid = os.getegid()
        supplementary = os.getgroups()
    except AttributeError:
        raise IdentityUnavailableError("user identity is not available on this platform")
    except OSError as e:
        raise IdentityUnavailableError(f"cannot determine user identity: {e}")

    group_ids = [primary_gid]
    for gid in supplementary:
        if gid not in group_ids:
            group_ids.append(gid)

    issued_at = int(now if now is not None else time.time())
    credential = Credential(
        user_id=user_id,
        group_ids=tuple(group_ids),
        issuer=f"C:{socket.gethostname()}",
        expires_at=issued_at + timeout,
    )
    logger.debug(f"Generated credential uid={user_id} groups={list(group_ids)}")
    return credential
