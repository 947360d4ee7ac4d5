from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class NcmMetadata:
    format: str = None
    raw: dict = field(default_factory=dict)


@dataclass
class NcmContainer:
    key_table: bytes = None
    metadata: NcmMetadata = None
    audio_offset: int = None


@dataclass
class DumpItem:
    input_path: Path = None
    output_path: Path = None
    container: NcmContainer = None
    error: Exception = None
