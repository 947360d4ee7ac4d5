MAGIC = b"CTENFDAM"
CORE_KEY = b"hzHRAmso5kInbaxW"
META_KEY = b"#14ljk_!\\]&0U<'("

KEY_MASK = 0x64
META_MASK = 0x63

KEY_PREFIX_LENGTH = 17  # b"neteasecloudmusic"
META_PREFIX_LENGTH = 22  # b"163 key(Don't modify):"
META_PLAINTEXT_PREFIX_LENGTH = 6  # b"music:"

RESERVED_HEADER_LENGTH = 2
RESERVED_GAP_LENGTH = 9  # CRC32 followed by 5 unused bytes

AES_BLOCK_SIZE = 16
KEY_TABLE_SIZE = 256
DEFAULT_CHUNK_SIZE = 0x8000

CONTAINER_FILE_EXTENSION = ".ncm"
FORMAT_FIELD = "format"
