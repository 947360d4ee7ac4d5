"""Builds synthetic NCM containers and holds a plain reference decoder."""

import base64
import json
import struct

from Cryptodome.Cipher import AES
from Cryptodome.Util import Padding

MAGIC = b"CTENFDAM"
CORE_KEY = b"hzHRAmso5kInbaxW"
META_KEY = b"#14ljk_!\\]&0U<'("
KEY_PREFIX = b"neteasecloudmusic"
META_PREFIX = b"163 key(Don't modify):"
META_PLAINTEXT_PREFIX = b"music:"

SEED = bytes.fromhex("0123456789abcdeffedcba9876543210")


def aes_ecb_encrypt(plaintext: bytes, key: bytes) -> bytes:
    return AES.new(key, AES.MODE_ECB).encrypt(Padding.pad(plaintext, 16))


def xor_mask(data: bytes, mask: int) -> bytes:
    return bytes(b ^ mask for b in data)


def build_key_block(seed: bytes = SEED, prefix: bytes = KEY_PREFIX) -> bytes:
    return xor_mask(aes_ecb_encrypt(prefix + seed, CORE_KEY), 0x64)


def build_meta_block(
    metadata: dict = None,
    plaintext: bytes = None,
) -> bytes:
    if plaintext is None:
        plaintext = META_PLAINTEXT_PREFIX + json.dumps(metadata).encode("utf-8")
    encoded = base64.b64encode(aes_ecb_encrypt(plaintext, META_KEY))
    return xor_mask(META_PREFIX + encoded, 0x63)


def length_prefixed(data: bytes) -> bytes:
    return struct.pack("<I", len(data)) + data


def reference_key_table(seed: bytes) -> list[int]:
    table = list(range(256))
    last = 0
    for i in range(256):
        swap = table[i]
        c = (swap + last + seed[i % len(seed)]) % 256
        table[i] = table[c]
        table[c] = swap
        last = c
    return table


def reference_descramble(table: list[int], data: bytes, chunk_size: int) -> bytes:
    output = bytearray()
    for start in range(0, len(data), chunk_size):
        chunk = data[start : start + chunk_size]
        for i, value in enumerate(chunk):
            j = (i + 1) % 256
            k = (table[j] + j) % 256
            output.append(value ^ table[(table[j] + table[k]) % 256])
    return bytes(output)


def build_container(
    audio: bytes = b"",
    seed: bytes = SEED,
    metadata: dict = None,
    cover: bytes = b"\xff\xd8 not really a jpeg \xff\xd9",
    magic: bytes = MAGIC,
    key_block: bytes = None,
    meta_block: bytes = None,
) -> bytes:
    """Wrap ``audio`` so that decoding the result yields ``audio`` again."""
    if metadata is None:
        metadata = {"format": "mp3", "musicName": "Test", "bitrate": 320000}
    if key_block is None:
        key_block = build_key_block(seed)
    if meta_block is None:
        meta_block = build_meta_block(metadata)
    payload = reference_descramble(reference_key_table(seed), audio, 0x8000)
    return (
        magic
        + b"\x01\x70"
        + length_prefixed(key_block)
        + length_prefixed(meta_block)
        + b"\xde\xad\xbe\xef\x00\x00\x00\x00\x00"
        + length_prefixed(cover)
        + payload
    )
