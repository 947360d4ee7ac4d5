from .cipher import aes_ecb_decrypt, unmask
from .container import locate_payload, read_container, validate_header
from .descrambler import (
    apply_keystream,
    build_keystream,
    descramble_chunk,
    descramble_stream,
)
from .dumper import NcmDumper
from .exceptions import *
from .key_table import derive_key_table, read_key_table
from .metadata import parse_metadata, read_metadata
from .reader import ContainerReader
from .types import *
