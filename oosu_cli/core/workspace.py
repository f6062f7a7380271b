"""
Scoped ownership of the per-run temporary working directory.
"""

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from oosu_cli.exceptions import WorkspaceError

log = logging.getLogger(__name__)

WORKDIR_PREFIX = "oosu-cli-"


@contextmanager
def working_directory(base_dir: Path | None = None) -> Iterator[Path]:
    """
    Creates a uniquely named working directory and removes it on exit.

    Removal runs on every exit path, including exceptions and task
    cancellation. A failed removal is only logged at debug level.

    Raises:
        WorkspaceError: If the directory cannot be created.
    """
    try:
        path = Path(tempfile.mkdtemp(prefix=WORKDIR_PREFIX, dir=base_dir))
    except OSError as e:
        raise WorkspaceError(f"Could not create working directory: {e}") from e

    log.debug(f"Created working directory '{path}'.")
    try:
        yield path
    finally:
        remove_working_directory(path)


def remove_working_directory(path: Path) -> None:
    try:
        shutil.rmtree(path)
        log.debug(f"Removed working directory '{path}'.")
    except OSError as e:
        log.debug(f"Could not remove working directory '{path}': {e}")
