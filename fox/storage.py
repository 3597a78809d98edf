"""Reading and writing documents on disk."""

import logging
import os
import stat
import tempfile

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class SaveError(Exception):
    """Raised when the document could not be written to disk."""

    def __init__(self, path: str, error: OSError):
        super().__init__(f"Cannot save to {path}: {error.strerror or error}")
        self.path = path
        self.error = error


def expand_path(path: str) -> str:
    """Expand ``~`` and environment variables in a user-supplied path."""
    return os.path.expandvars(os.path.expanduser(path))


def load_lines(path: str) -> list[str]:
    """Load a UTF-8 file as a list of lines.

    A missing file is a new document and yields a single empty line.
    """
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
    except FileNotFoundError:
        logger.info(f"{path} does not exist, starting a new document")
        return [""]
    return content.split('\n') if content else [""]


def save_lines(path: str, lines: list[str]) -> None:
    """Write lines joined by single newlines, atomically replacing ``path``.

    Raises:
        SaveError: if the file could not be written.
    """
    content = '\n'.join(lines)
    # Temp file in the same directory so the rename stays on one filesystem
    dir_name = os.path.dirname(path) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                         dir=dir_name, suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        if os.path.exists(path):
            # Keep the permissions of the file being replaced
            os.chmod(temp_filename, stat.S_IMODE(os.stat(path).st_mode))
        else:
            # Temp files are created 0600; new files get the usual umask default
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(temp_filename, 0o666 & ~umask)
        os.replace(temp_filename, path)
    except OSError as e:
        if temp_filename is not None and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError:
                logger.warning(f"Could not remove temporary file {temp_filename}")
        logger.error(f"Saving {path} failed: {e}")
        raise SaveError(path, e) from e
    logger.info(f"Saved {len(lines)} lines to {path}")
