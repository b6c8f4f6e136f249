import time
from uuid import uuid4


def utc_epoch_now() -> int:
    """Return the current UTC time as whole epoch seconds.

    Timer start/stop times are stored in this form.
    """
    return int(time.time())


def new_unique_id() -> str:
    """Generate an opaque external identifier for a project or timer."""
    return uuid4().hex
