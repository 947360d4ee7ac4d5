import random
import unittest

from ncmdump.decoder import (
    apply_keystream,
    build_keystream,
    derive_key_table,
    descramble_chunk,
    descramble_stream,
)

from ._container import SEED, reference_descramble, reference_key_table


def split(data: bytes, chunk_size: int) -> list[bytes]:
    return [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]


class DescramblerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.key_table = derive_key_table(SEED)
        self.payload = random.Random(42).randbytes(5000)

    def test_keystream(self) -> None:
        keystream = build_keystream(self.key_table)
        self.assertEqual(len(keystream), 256)
        self.assertEqual(apply_keystream(keystream, bytes(256)), keystream)

    def test_chunk_matches_reference(self) -> None:
        table = reference_key_table(SEED)
        self.assertEqual(
            descramble_chunk(self.key_table, self.payload),
            reference_descramble(table, self.payload, len(self.payload)),
        )

    def test_stream_matches_reference(self) -> None:
        table = reference_key_table(SEED)
        for chunk_size in (1, 100, 256, 1000, 0x8000):
            output = b"".join(
                descramble_stream(self.key_table, split(self.payload, chunk_size))
            )
            self.assertEqual(
                output,
                reference_descramble(table, self.payload, chunk_size),
            )

    def test_applying_twice_restores_input(self) -> None:
        chunks = split(self.payload, 1024)
        clear = list(descramble_stream(self.key_table, chunks))
        self.assertNotEqual(b"".join(clear), self.payload)
        self.assertEqual(
            b"".join(descramble_stream(self.key_table, clear)),
            self.payload,
        )

    def test_chunk_sizes_aligned_to_256_agree(self) -> None:
        outputs = {
            b"".join(descramble_stream(self.key_table, split(self.payload, size)))
            for size in (256, 512, 1024, 4096, 0x8000)
        }
        self.assertEqual(len(outputs), 1)

    def test_chunk_sizes_not_aligned_to_256_differ(self) -> None:
        # The index restarts with every chunk, so boundaries off the
        # 256-byte period change the output
        aligned = b"".join(descramble_stream(self.key_table, split(self.payload, 256)))
        unaligned = b"".join(
            descramble_stream(self.key_table, split(self.payload, 100))
        )
        self.assertEqual(aligned[:100], unaligned[:100])
        self.assertNotEqual(aligned, unaligned)

    def test_empty_chunk(self) -> None:
        self.assertEqual(descramble_chunk(self.key_table, b""), b"")
        self.assertEqual(list(descramble_stream(self.key_table, [])), [])


if __name__ == "__main__":
    unittest.main()
