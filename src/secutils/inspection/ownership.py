"""Owner and group principal resolution."""

from __future__ import annotations

import logging
from typing import Tuple

try:  # pragma: no cover - platform dependent
    import grp
    import pwd
except ImportError:  # pragma: no cover - executed on Windows
    grp = None  # type: ignore[assignment]
    pwd = None  # type: ignore[assignment]

LOGGER = logging.getLogger(__name__)


def supports_principal_names() -> bool:
    """Return whether this platform can map numeric ids to principal names."""
    return pwd is not None and grp is not None


def resolve_principals(uid: int, gid: int, *, resolve_names: bool = True) -> Tuple[str, str]:
    """Return owner and group names, falling back to numeric ids.

    Resolution never raises: a uid or gid without a database entry is
    rendered as its decimal string.

    Args:
        uid: Numeric user id from ``st_uid``.
        gid: Numeric group id from ``st_gid``.
        resolve_names: When False, skip name lookups entirely.

    Returns:
        Tuple[str, str]: Owner and group labels.
    """
    if not resolve_names or not supports_principal_names():
        return str(uid), str(gid)
    return _user_name(uid), _group_name(gid)


def _user_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError) as exc:
        LOGGER.warning("Could not resolve uid %s to a user name: %s", uid, exc)
        return str(uid)


def _group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except (KeyError, OverflowError) as exc:
        LOGGER.warning("Could not resolve gid %s to a group name: %s", gid, exc)
        return str(gid)


__all__ = ["resolve_principals", "supports_principal_names"]
