import logging
import typing
from pathlib import Path

from ..utils import iter_container_paths
from .constants import DEFAULT_CHUNK_SIZE, KEY_TABLE_SIZE
from .container import read_container
from .descrambler import descramble_stream
from .exceptions import NcmOutputWriteFailedError
from .reader import ContainerReader
from .types import DumpItem, NcmMetadata

logger = logging.getLogger(__name__)


class NcmDumper:
    def __init__(
        self,
        output_path: str = None,
        overwrite: bool = False,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.output_path = output_path
        self.overwrite = overwrite
        self.chunk_size = chunk_size
        self.initialize()

    def initialize(self):
        if self.chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive, got {self.chunk_size}")
        if self.chunk_size % KEY_TABLE_SIZE:
            logger.warning(
                f"Chunk size {self.chunk_size} is not a multiple of "
                f"{KEY_TABLE_SIZE}, output will differ from other decoders"
            )

    def get_output_path(self, input_path: Path, metadata: NcmMetadata) -> Path:
        output_path = input_path.with_suffix(f".{metadata.format}")
        if self.output_path is not None:
            output_path = Path(self.output_path) / output_path.name
        return output_path

    def _write_payload(
        self,
        reader: ContainerReader,
        key_table: bytes,
        output_path: Path,
    ) -> None:
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_file = open(output_path, "wb" if self.overwrite else "xb")
        except FileExistsError:
            raise
        except OSError as e:
            raise NcmOutputWriteFailedError(output_path, e.strerror or str(e)) from e

        try:
            with output_file:
                for chunk in descramble_stream(
                    key_table,
                    reader.iter_chunks(self.chunk_size),
                ):
                    output_file.write(chunk)
        except OSError as e:
            output_path.unlink(missing_ok=True)
            raise NcmOutputWriteFailedError(output_path, e.strerror or str(e)) from e
        except BaseException:
            output_path.unlink(missing_ok=True)
            raise

    def _dump(self, dump_item: DumpItem) -> None:
        with open(dump_item.input_path, "rb") as input_file:
            reader = ContainerReader(input_file)
            dump_item.container = read_container(reader)
            dump_item.output_path = self.get_output_path(
                dump_item.input_path,
                dump_item.container.metadata,
            )
            if dump_item.output_path.resolve() == dump_item.input_path.resolve():
                raise NcmOutputWriteFailedError(
                    dump_item.output_path,
                    "output would replace the input container",
                )
            if dump_item.output_path.exists() and not self.overwrite:
                raise FileExistsError(
                    f'Output file already exists at "{dump_item.output_path}"'
                )
            logger.debug(f'Writing "{dump_item.output_path}"')
            self._write_payload(
                reader,
                dump_item.container.key_table,
                dump_item.output_path,
            )

    def dump_file(self, input_path: str | Path) -> DumpItem:
        dump_item = DumpItem(input_path=Path(input_path))
        self._dump(dump_item)
        return dump_item

    def get_dump_queue(self, paths: typing.Iterable[str | Path]) -> list[Path]:
        dump_queue = []
        for path in paths:
            dump_queue.extend(iter_container_paths(path))
        return dump_queue

    def dump(self, paths: typing.Iterable[str | Path]) -> typing.Iterator[DumpItem]:
        for input_path in self.get_dump_queue(paths):
            dump_item = DumpItem(input_path=input_path)
            try:
                self._dump(dump_item)
            except Exception as e:
                dump_item.error = e
            yield dump_item
