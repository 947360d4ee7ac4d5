import logging

from .cipher import aes_ecb_decrypt, unmask
from .constants import CORE_KEY, KEY_MASK, KEY_PREFIX_LENGTH, KEY_TABLE_SIZE
from .exceptions import NcmInvalidKeyMaterialError
from .reader import ContainerReader

logger = logging.getLogger(__name__)


def derive_key_table(seed: bytes) -> bytes:
    """Shuffle the identity permutation of 0..255, keyed by ``seed``.

    Every step swaps two entries, so the table stays a permutation
    throughout. The result is used as a substitution table by the
    descrambler.
    """
    if not seed:
        raise NcmInvalidKeyMaterialError()

    key_table = bytearray(range(KEY_TABLE_SIZE))
    last_byte = 0
    seed_offset = 0
    for i in range(KEY_TABLE_SIZE):
        swap = key_table[i]
        c = (swap + last_byte + seed[seed_offset]) & 0xFF
        seed_offset += 1
        if seed_offset >= len(seed):
            seed_offset = 0
        key_table[i] = key_table[c]
        key_table[c] = swap
        last_byte = c
    return bytes(key_table)


def decrypt_key_block(key_block: bytes) -> bytes:
    plaintext = aes_ecb_decrypt(unmask(key_block, KEY_MASK), CORE_KEY)
    return plaintext[KEY_PREFIX_LENGTH:]


def read_key_table(reader: ContainerReader) -> bytes:
    key_block = reader.read_length_prefixed()
    logger.debug(f"Key block is {len(key_block)} byte(s)")
    seed = decrypt_key_block(key_block)
    logger.debug(f"Key seed is {len(seed)} byte(s)")
    return derive_key_table(seed)
