import inspect
import logging

import click
import colorama

from .. import __version__
from ..decoder import NcmDumper, NcmError
from .utils import CustomLoggerFormatter

logger = logging.getLogger(__name__)

dumper_sig = inspect.signature(NcmDumper.__init__)


def setup_logging(log_level: str, log_file: str) -> None:
    package_logger = logging.getLogger(__name__.split(".")[0])
    package_logger.setLevel(log_level)
    package_logger.propagate = False
    # Repeated invocations in one process must not stack handlers
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(CustomLoggerFormatter())
    package_logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(CustomLoggerFormatter(use_colors=False))
        package_logger.addHandler(file_handler)


@click.command()
@click.help_option("-h", "--help")
@click.version_option(__version__, "-v", "--version")
@click.argument(
    "paths",
    nargs=-1,
    type=str,
    required=True,
)
@click.option(
    "--output-path",
    "-o",
    type=click.Path(file_okay=False, dir_okay=True, writable=True, resolve_path=True),
    default=dumper_sig.parameters["output_path"].default,
    help="Output directory path, defaults to the directory of each input file",
)
@click.option(
    "--overwrite",
    is_flag=True,
    default=dumper_sig.parameters["overwrite"].default,
    help="Overwrite existing files",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=dumper_sig.parameters["chunk_size"].default,
    show_default=True,
    help="Read chunk size in bytes",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level",
)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False, writable=True, resolve_path=True),
    default=None,
    help="Log file path",
)
@click.option(
    "--no-exceptions",
    is_flag=True,
    default=False,
    help="Don't print tracebacks of unexpected errors",
)
def main(
    paths: tuple[str, ...],
    output_path: str,
    overwrite: bool,
    chunk_size: int,
    log_level: str,
    log_file: str,
    no_exceptions: bool,
):
    colorama.just_fix_windows_console()
    setup_logging(log_level, log_file)

    logger.info(f"Starting ncmdump {__version__}")

    dumper = NcmDumper(
        output_path=output_path,
        overwrite=overwrite,
        chunk_size=chunk_size,
    )

    dump_queue = dumper.get_dump_queue(paths)
    if not dump_queue:
        logger.warning("No NCM files found")

    error_count = 0
    try:
        for file_index, dump_item in enumerate(dumper.dump(dump_queue), 1):
            extra = {"file_progress": (file_index, len(dump_queue))}
            error = dump_item.error

            if error is None:
                logger.info(
                    f'Dumped "{dump_item.input_path}" to "{dump_item.output_path}"',
                    extra=extra,
                )
            elif isinstance(error, FileExistsError):
                logger.warning(
                    f'Skipping "{dump_item.input_path}": {error}',
                    extra=extra,
                )
            elif isinstance(error, NcmError):
                error_count += 1
                logger.error(
                    f'Error dumping "{dump_item.input_path}": {error}',
                    extra={**extra, "error_kind": error.kind},
                )
            else:
                error_count += 1
                logger.error(
                    f'Error dumping "{dump_item.input_path}"',
                    exc_info=None if no_exceptions else error,
                    extra=extra,
                )
    except KeyboardInterrupt:
        exit(1)

    logger.info(f"Finished with {error_count} error(s)")
