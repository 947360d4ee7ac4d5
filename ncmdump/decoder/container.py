import logging

from .constants import MAGIC, RESERVED_GAP_LENGTH, RESERVED_HEADER_LENGTH
from .exceptions import NcmInvalidFormatError
from .key_table import read_key_table
from .metadata import read_metadata
from .reader import ContainerReader
from .types import NcmContainer

logger = logging.getLogger(__name__)


def validate_header(reader: ContainerReader) -> None:
    # A stream too short to hold the signature is not a container either
    magic = reader.stream.read(len(MAGIC))
    if magic != MAGIC:
        raise NcmInvalidFormatError(magic)
    reader.skip(RESERVED_HEADER_LENGTH)


def locate_payload(reader: ContainerReader) -> int:
    """Move the cursor past the gap and the cover image, onto the audio."""
    reader.skip(RESERVED_GAP_LENGTH)
    cover_length = reader.read_u32le()
    logger.debug(f"Skipping {cover_length} byte(s) of cover image")
    reader.skip(cover_length)
    return reader.tell()


def read_container(reader: ContainerReader) -> NcmContainer:
    validate_header(reader)
    key_table = read_key_table(reader)
    metadata = read_metadata(reader)
    audio_offset = locate_payload(reader)
    logger.debug(
        f'Audio format is "{metadata.format}", payload starts at {audio_offset}'
    )
    return NcmContainer(
        key_table=key_table,
        metadata=metadata,
        audio_offset=audio_offset,
    )
