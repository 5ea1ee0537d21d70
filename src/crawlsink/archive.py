"""Raw response archive with an append-only index."""

import hashlib
import logging
import shutil
import threading
from pathlib import Path

from .core import FileSink, Response
from .errors import ArchiveError, OutputError

LOGGER = logging.getLogger(__name__)

DEFAULT_RESPONSE_DIR = "crawl_responses"
INDEX_FILE = "index.txt"


def response_file_name(url: str) -> str:
    """Derive the archive file name for a request URL."""
    return hashlib.sha1(url.encode("utf-8")).hexdigest() + ".txt"


class ResponseArchiver:
    """Stores raw responses, one file each, and records them in index.txt.

    The directory is wiped on construction so an archive never mixes runs.
    """

    def __init__(self, directory: str | Path = DEFAULT_RESPONSE_DIR):
        self.directory = Path(directory)
        self.index_path = self.directory / INDEX_FILE
        self._index_lock = threading.Lock()
        try:
            shutil.rmtree(self.directory, ignore_errors=True)
            self.directory.mkdir(parents=True, exist_ok=True)
            self.index_path.touch()
        except OSError as e:
            raise ArchiveError(f"could not create response directory {self.directory}") from e
        LOGGER.debug("Archiving responses to %s", self.directory)

    def write(self, response: Response) -> Path:
        """Archive one response and return the file it was written to."""
        url = response.archive_url
        if not url:
            raise ArchiveError("response has no request URL")

        path = self.directory / response_file_name(url)
        try:
            with FileSink(path) as sink:
                sink.write(response.raw())
        except OutputError as e:
            raise ArchiveError(f"could not write response for {url}") from e

        self._update_index(f"{path.name} {url} ({response.status} {response.reason})")
        LOGGER.debug("Archived %s to %s", url, path.name)
        return path

    def _update_index(self, line: str):
        """Append a single index line under the index lock."""
        data = (line.replace("\n", " ") + "\n").encode("utf-8")
        with self._index_lock:
            try:
                with open(self.index_path, "ab") as f:
                    f.write(data)
                    f.flush()
            except OSError as e:
                raise ArchiveError(f"could not update index {self.index_path}") from e
