import typing

from .constants import KEY_TABLE_SIZE


def build_keystream(key_table: bytes) -> bytes:
    """Return the mask bytes for chunk-local indices 0..255.

    The mask of a byte depends on its chunk-local index ``i`` only through
    ``(i + 1) & 0xff``, so the keystream repeats every 256 bytes.
    """
    keystream = bytearray(KEY_TABLE_SIZE)
    for i in range(KEY_TABLE_SIZE):
        j = (i + 1) & 0xFF
        k = (key_table[j] + j) & 0xFF
        l = (key_table[j] + key_table[k]) & 0xFF
        keystream[i] = key_table[l]
    return bytes(keystream)


def apply_keystream(keystream: bytes, chunk: bytes) -> bytes:
    # The index restarts at 0 for every chunk. The XOR runs over the whole
    # chunk as one big integer, same result as a per-byte loop
    repeats = -(-len(chunk) // len(keystream))
    mask = (keystream * repeats)[: len(chunk)]
    return (int.from_bytes(chunk, "big") ^ int.from_bytes(mask, "big")).to_bytes(
        len(chunk), "big"
    )


def descramble_chunk(key_table: bytes, chunk: bytes) -> bytes:
    return apply_keystream(build_keystream(key_table), chunk)


def descramble_stream(
    key_table: bytes,
    chunks: typing.Iterable[bytes],
) -> typing.Iterator[bytes]:
    keystream = build_keystream(key_table)
    for chunk in chunks:
        yield apply_keystream(keystream, chunk)
