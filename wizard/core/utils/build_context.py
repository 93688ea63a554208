from pathlib import Path
from typing import IO

from docker.utils import tar

DOCKERIGNORE = '.dockerignore'


def read_dockerignore(root: Path) -> list[str]:
    path = root / DOCKERIGNORE
    if not path.is_file():
        return []
    patterns = [line.strip() for line in path.read_text().splitlines()]
    return [pattern for pattern in patterns if pattern and not pattern.startswith('#')]


def make_build_context(root: Path, dockerfile: str = 'Dockerfile') -> IO[bytes]:
    """
    Gzipped tar of the project root spooled to a temporary file.
    Paths matched by .dockerignore are left out, the Dockerfile is always kept.
    """
    return tar(str(root), exclude=read_dockerignore(root), dockerfile=(dockerfile, None), gzip=True)
