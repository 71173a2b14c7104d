import datetime
import logging
import os
import platform
import stat
import time
import uuid

from . import config

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Generate a unique record id."""
    return str(uuid.uuid4())


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def generate_order_number() -> str:
    """
    Build an order number from the trailing digits of the millisecond clock,
    e.g. ORD-482913.
    """
    millis = str(int(time.time() * 1000))
    return f"{config.ORDER_NUMBER_PREFIX}{millis[-config.ORDER_NUMBER_DIGITS:]}"


def set_owner_only_permissions(filepath: str) -> bool:
    """
    Set file to be readable/writable by owner only.
    Windows ACLs are left as inherited from the user's profile directory.
    """
    if platform.system() == 'Windows':
        logger.debug(f"Skipping POSIX permission change for {filepath} on Windows.")
        return True
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)  # 600
    except OSError as e:
        logger.error(f"Failed to set file permissions for {filepath}: {e}")
        return False
    return True
