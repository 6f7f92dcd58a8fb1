import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

EXPORT_DIR = Path(tempfile.gettempdir()) / "billing-exports"


@contextmanager
def transient_file(prefix: str, suffix: str) -> Iterator[Path]:
    """Yield a fresh temp path; the file is removed if the block raises."""
    EXPORT_DIR.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=EXPORT_DIR)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    except BaseException:
        path.unlink(missing_ok=True)
        raise
