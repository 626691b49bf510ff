import os
import sys
import logging
from typing import Sequence, NoReturn

from . import util
from .exceptions import HandoffError, ERROR_ENTRYPOINT_MISSING

__module__ = "valkeyfips.handoff"

logger = logging.getLogger(__name__)


def exec_entrypoint(entrypoint: str, args: Sequence[str]) -> NoReturn:
    """
    Replaces the current process with `entrypoint`, argv[0] is the entrypoint
    path followed by `args` unchanged. Nothing runs after a successful exec.
    """
    if not util.is_executable(entrypoint):
        raise HandoffError(ERROR_ENTRYPOINT_MISSING.format(path=entrypoint))
    argv = [entrypoint, *args]
    logger.info(f"exec {argv}")
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execv(entrypoint, argv)
    except OSError as err:
        raise HandoffError(f"Unable to execute {entrypoint}: {err.strerror}") from err
    raise HandoffError(f"{entrypoint} returned control to the validator")
