"""All-or-nothing file replacement.

Every target is first written to a temporary file in its own directory;
only when all of them are written are they moved into place with
``os.replace``. A failure before the swap leaves every destination
untouched.
"""

import os
import tempfile
from pathlib import Path
from typing import List, Mapping, Tuple, Union

from service_actions.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def write_atomically(contents: Mapping[PathLike, str]) -> List[Path]:
    """Replace each target file with its content, all or nothing.

    Args:
        contents: Destination path to UTF-8 text

    Returns:
        The destination paths written

    Raises:
        OSError: If any temporary file cannot be written or swapped in.
            Temporary files are removed before the error propagates.
    """
    staged: List[Tuple[str, Path]] = []
    try:
        for target, text in contents.items():
            destination = Path(target)
            directory = destination.parent
            directory.mkdir(parents=True, exist_ok=True)
            handle, temp_name = tempfile.mkstemp(
                prefix=f".{destination.name}.", suffix=".tmp", dir=directory
            )
            staged.append((temp_name, destination))
            with os.fdopen(handle, "w", encoding="utf-8", newline="") as stream:
                stream.write(text)
                stream.flush()
                os.fsync(stream.fileno())

        for temp_name, destination in staged:
            os.replace(temp_name, destination)
            logger.debug(f"Replaced {destination}")
    except OSError:
        for temp_name, _ in staged:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
        raise

    return [destination for _, destination in staged]
