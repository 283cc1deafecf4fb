"""Downloaded-file checks for the Upload and Download page."""

import logging
import os

from demoqa.waits import poll_until

logger = logging.getLogger(__name__)

SAMPLE_FILE = "sampleFile.jpeg"
FILE_TIMEOUT = 40


def download_path(downloads_dir: str, file_name: str = SAMPLE_FILE) -> str:
    """Where the browser saves ``file_name``."""
    return os.path.join(downloads_dir, file_name)


def read_size(path: str) -> int:
    """Bytes in the file, 0 while it is missing or still being written."""
    if not os.path.isfile(path) or os.path.exists(path + ".crdownload"):
        return 0
    with open(path, "rb") as handle:
        return len(handle.read())


def wait_for_download(path: str, timeout: float = FILE_TIMEOUT) -> int:
    """Poll until the file exists with a non-zero size; returns the size."""
    size = poll_until(
        None,
        lambda _: read_size(path),
        timeout,
        f'Downloaded file "{path}" is missing or empty',
        poll_frequency=0.5,
    )
    logger.info("Downloaded %s (%d bytes)", path, size)
    return size


def clear_download(path: str) -> None:
    """Remove a stale copy so the next check sees a fresh download."""
    if os.path.exists(path):
        os.remove(path)
