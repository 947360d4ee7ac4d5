from Cryptodome.Cipher import AES
from Cryptodome.Util import Padding

from .constants import AES_BLOCK_SIZE
from .exceptions import NcmDecryptionFailedError


def aes_ecb_decrypt(data: bytes, key: bytes) -> bytes:
    """AES-128-ECB decrypt ``data`` and strip its PKCS#7 padding."""
    if not data or len(data) % AES_BLOCK_SIZE:
        raise NcmDecryptionFailedError(
            f"ciphertext length {len(data)} is not a positive multiple of "
            f"{AES_BLOCK_SIZE}"
        )

    cipher = AES.new(key, AES.MODE_ECB)
    try:
        return Padding.unpad(cipher.decrypt(data), AES_BLOCK_SIZE)
    except ValueError as e:
        raise NcmDecryptionFailedError(str(e)) from e


def unmask(data: bytes, mask: int) -> bytes:
    return data.translate(bytes(value ^ mask for value in range(256)))
