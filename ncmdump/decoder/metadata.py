import base64
import binascii
import json
import logging

from .cipher import aes_ecb_decrypt, unmask
from .constants import (
    FORMAT_FIELD,
    META_KEY,
    META_MASK,
    META_PLAINTEXT_PREFIX_LENGTH,
    META_PREFIX_LENGTH,
)
from .exceptions import NcmMalformedMetadataError, NcmMissingFieldError
from .reader import ContainerReader
from .types import NcmMetadata

logger = logging.getLogger(__name__)


def decrypt_metadata_block(meta_block: bytes) -> bytes:
    encoded = unmask(meta_block, META_MASK)[META_PREFIX_LENGTH:]
    try:
        ciphertext = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise NcmMalformedMetadataError(f"invalid base64 ({e})") from e

    plaintext = aes_ecb_decrypt(ciphertext, META_KEY)
    if len(plaintext) <= META_PLAINTEXT_PREFIX_LENGTH:
        raise NcmMalformedMetadataError("plaintext is shorter than its prefix")
    return plaintext[META_PLAINTEXT_PREFIX_LENGTH:]


def parse_metadata(meta_block: bytes) -> NcmMetadata:
    """Decode a masked metadata block into its JSON record.

    Only the ``format`` field is interpreted; it becomes the output file
    extension, so it has to be a plain, non-empty string.
    """
    plaintext = decrypt_metadata_block(meta_block)
    try:
        raw = json.loads(plaintext.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise NcmMalformedMetadataError(f"not UTF-8 ({e})") from e
    except json.JSONDecodeError as e:
        raise NcmMalformedMetadataError(f"not JSON ({e})") from e

    if not isinstance(raw, dict):
        raise NcmMalformedMetadataError("not a JSON object")

    audio_format = raw.get(FORMAT_FIELD)
    if audio_format is None or audio_format == "":
        raise NcmMissingFieldError(FORMAT_FIELD)
    if not isinstance(audio_format, str):
        raise NcmMalformedMetadataError(f'"{FORMAT_FIELD}" is not a string')
    if "/" in audio_format or "\\" in audio_format:
        raise NcmMalformedMetadataError(
            f'"{FORMAT_FIELD}" contains a path separator'
        )
    if "\x00" in audio_format:
        raise NcmMalformedMetadataError(f'"{FORMAT_FIELD}" contains a NUL byte')

    return NcmMetadata(format=audio_format, raw=raw)


def read_metadata(reader: ContainerReader) -> NcmMetadata:
    meta_block = reader.read_length_prefixed()
    logger.debug(f"Metadata block is {len(meta_block)} byte(s)")
    return parse_metadata(meta_block)
