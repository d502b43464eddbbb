"""log file lifecycle and logging setup."""
import faulthandler
import json
import logging
import platform
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT_VERSION = 1
LOG_FILE_EXPIRY = timedelta(hours=720)  # one month
# header and the executing line take about 150 bytes
EMPTY_LOG_FILE_SIZE = 200

logger = logging.getLogger(__name__)


def new_log_path(log_dir: Path, suffix: str = "log") -> Path:
    """return a timestamped log file path in log_dir, creating the directory."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"failed to create log file folder {log_dir}: {e}")
    
    name = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S")
    return log_dir / f"{name}.{suffix}"


def init_log_file(log_path: Path, identifier: str, version: str) -> Optional[Path]:
    """
    create a log file and write its header.
    
    the header lets the file be read back as a record: format version,
    meta data with an expiry, the data type and a line naming the program.
    
    returns:
        log_path, or None if the file could not be written
    """
    now = datetime.now(timezone.utc)
    meta = {
        "created": int(now.timestamp()),
        "expires": int((now + LOG_FILE_EXPIRY).timestamp()),
    }
    header = (
        f"{LOG_FORMAT_VERSION}\n"
        f"{json.dumps(meta)}\n"
        "S\n"
        f"executing {identifier} version {version} on {platform.system().lower()} {platform.machine().lower()}\n"
    )
    
    try:
        with open(log_path, "w") as f:
            f.write(header)
    except OSError as e:
        logger.error(f"failed to write header for log file {log_path}: {e}")
        finalize_log_file(log_path)
        return None
    
    return log_path


def finalize_log_file(log_path: Path) -> None:
    """delete the log file if nothing was logged after the header."""
    try:
        size = log_path.stat().st_size
    except OSError:
        return
    
    if size < EMPTY_LOG_FILE_SIZE:
        try:
            log_path.unlink()
        except OSError as e:
            logger.error(f"failed to delete empty log file {log_path}: {e}")


def log_error(log_dir: Path, error: Optional[BaseException], identifier: str, version: str) -> Optional[Path]:
    """write error to a new .error.log file in log_dir."""
    if error is None:
        return None
    
    log_path = init_log_file(new_log_path(log_dir, "error.log"), identifier, version)
    if log_path is None:
        return None
    
    with open(log_path, "a") as f:
        f.write(f"{error}\n")
    return log_path


def log_stack(log_dir: Path, identifier: str, version: str) -> Optional[Path]:
    """write the stacks of all threads to a new .stack.log file in log_dir."""
    log_path = init_log_file(new_log_path(log_dir, "stack.log"), identifier, version)
    if log_path is None:
        return None
    
    with open(log_path, "a") as f:
        faulthandler.dump_traceback(file=f, all_threads=True)
    return log_path


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None, console: Optional[Console] = None) -> None:
    """
    route log records to the console and, optionally, an initialized log file.
    
    args:
        level: name of the root log level
        log_file: file to append records to
        console: rich console for terminal output
    """
    handlers = [RichHandler(console=console or Console(stderr=True), show_path=False)]
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handlers.append(file_handler)
    
    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)
