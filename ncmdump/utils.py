import logging
import typing
from pathlib import Path

from .decoder.constants import CONTAINER_FILE_EXTENSION

logger = logging.getLogger(__name__)


def is_container_path(path: Path) -> bool:
    return path.suffix.lower() == CONTAINER_FILE_EXTENSION


def iter_container_paths(path: str | Path) -> typing.Iterator[Path]:
    path = Path(path)
    if not path.exists():
        logger.warning(f'"{path}" does not exist, skipping')
        return

    if path.is_dir():
        for child in sorted(path.rglob("*")):
            if child.is_file() and is_container_path(child):
                yield child
    elif is_container_path(path):
        yield path
