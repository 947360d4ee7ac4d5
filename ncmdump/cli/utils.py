import logging

import click


class CustomLoggerFormatter(logging.Formatter):
    """Coloured level prefix, plus the ``[File i/n]`` counter and the error
    kind when a record carries them as ``extra``."""

    base_format = "[%(levelname)-8s %(asctime)s]"
    level_styles = {
        logging.DEBUG: dict(dim=True),
        logging.INFO: dict(fg="green"),
        logging.WARNING: dict(fg="yellow"),
        logging.ERROR: dict(fg="red"),
        logging.CRITICAL: dict(fg="red", bold=True),
    }
    date_format = "%H:%M:%S"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__(datefmt=self.date_format)
        self.use_colors = use_colors

    def _colorize(self, text: str, **styles) -> str:
        return click.style(text, **styles) if self.use_colors else text

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            self._colorize(
                self.base_format % dict(
                    levelname=record.levelname,
                    asctime=self.formatTime(record, self.datefmt),
                ),
                **self.level_styles.get(record.levelno, {}),
            )
        ]

        file_progress = getattr(record, "file_progress", None)
        if file_progress:
            parts.append(self._colorize("[File {}/{}]".format(*file_progress), dim=True))

        error_kind = getattr(record, "error_kind", None)
        if error_kind:
            parts.append(self._colorize(f"<{error_kind}>", fg="red", bold=True))

        parts.append(record.getMessage())
        message = " ".join(parts)

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message
