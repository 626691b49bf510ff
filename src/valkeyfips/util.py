import logging
import os
import re
import hashlib
import subprocess
from pathlib import Path
from typing import Union, Mapping, Sequence

from .exceptions import CommandTimeout, MissingArtifact

__module__ = "valkeyfips.util"

logger = logging.getLogger(__name__)
CHUNK_SIZE = 65536


def is_executable(file_path: str) -> bool:
    return Path(file_path).is_file() and os.access(file_path, os.X_OK)


def run_command(
    args: Sequence[str],
    timeout: float,
    env: Union[Mapping[str, str], None] = None,
) -> subprocess.CompletedProcess:
    """
    Runs an external tool to completion and captures its output.

    Raises CommandTimeout when the tool outlives `timeout`, and MissingArtifact
    when it cannot be started at all. A non-zero exit is returned, not raised,
    the caller decides what the status means.
    """
    command = " ".join(args)
    logger.debug(f"running {command} (timeout {timeout}s)")
    try:
        return subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
            env=dict(env) if env is not None else None,
        )
    except subprocess.TimeoutExpired as err:
        logger.debug(err)
        raise CommandTimeout(command, timeout) from err
    except OSError as err:
        raise MissingArtifact(f"Unable to execute {args[0]}: {err.strerror}") from err


def sha256_file(file_path: str) -> str:
    digest = hashlib.sha256()
    with open(file_path, "rb") as handle:
        for chunk in iter(lambda: handle.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def file_identity(file_path: str) -> tuple[int, int]:
    stat = os.stat(file_path)
    return stat.st_dev, stat.st_ino


def read_cpu_flags(cpuinfo_path: str) -> Union[set[str], None]:
    cpuinfo = Path(cpuinfo_path)
    try:
        content = cpuinfo.read_text(encoding="utf8", errors="replace")
    except OSError as err:
        logger.debug(err)
        return None
    flags = set()
    for line in content.splitlines():
        name, _, value = line.partition(":")
        # arm64 reports "Features" rather than "flags"
        if name.strip().lower() in ["flags", "features"]:
            flags.update(value.split())
    return flags


def parse_version(version: str) -> tuple[int, ...]:
    parts = []
    for part in re.split(r"[.\-+]", version.strip()):
        match = re.match(r"\d+", part)
        if not match:
            break
        parts.append(int(match.group()))
    return tuple(parts)


def first_line(output: Union[str, None]) -> str:
    if not output:
        return ""
    return output.strip().splitlines()[0].strip() if output.strip() else ""
