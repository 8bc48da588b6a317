import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path


def clean_old_logs(log_dir: Path, max_files: int = 5):
    """Remove old log files, keeping only the most recent `max_files` logs

    Args:
        log_dir (Path): The directory where the log files are stored.
        max_files (int, optional): The maximum number of log files to keep. Defaults to 5.
    """
    log_files = sorted(log_dir.glob("*.log"), key=os.path.getmtime)
    while len(log_files) > max_files:
        old_log = log_files.pop(0)
        old_log.unlink()


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)
        return super().format(record)


def configure_logger(
    log_level: int = logging.DEBUG, log_dir: Path | None = None, max_log_files: int = 5
) -> list[logging.Handler]:
    """Configures the root logger for applications embedding the message center

    The library itself only emits records. Applications that want them on the
    console, and optionally in a dated log file, call this at startup.
    Calling it again replaces the handlers it installed before. The console
    format leaves out the timestamp; the file format keeps it.

    Args:
        log_level (int): The log level to log at. Defaults to logging.DEBUG.
        log_dir (Path | None): Where to store log files. Console only if None.
        max_log_files (int): Keeps only the previous (n) number of log files. Defaults to 5.

    Returns:
        list[logging.Handler]: The handlers installed on the root logger.
    """
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s", datefmt="%H:%M:%S"))
    handlers: list[logging.Handler] = [stream_handler]

    if log_dir is not None:
        log_dir.mkdir(exist_ok=True, parents=True)
        clean_old_logs(log_dir=log_dir, max_files=max_log_files)

        log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=10 * 1024**2, backupCount=5
        )
        file_handler.setFormatter(
            CustomFormatter("[%(asctime)s] %(levelname)s %(message)s", datefmt="%d.%m.%Y %H:%M:%S")
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.setLevel(log_level)

    # Replace handlers from an earlier call instead of duplicating output
    for old in [h for h in root.handlers if getattr(h, "_messagecenter", False)]:
        root.removeHandler(old)
        old.close()

    for handler in handlers:
        handler._messagecenter = True
        root.addHandler(handler)
    return handlers
