import os
from hashlib import sha256
from pathlib import Path
from typing import NamedTuple

PROJECT_HASH_BYTES = 6


def project_hash(folder: str) -> str:
    digest = sha256(folder.encode('utf-8')).digest()
    return ''.join(f'{byte:x}' for byte in digest[:PROJECT_HASH_BYTES])


class ProjectContext(NamedTuple):
    path: Path
    name: str
    hash: str

    @classmethod
    def from_path(cls, path: str | Path) -> 'ProjectContext':
        path = Path(path).absolute()
        return cls(path=path, name=path.name, hash=project_hash(str(path)))

    @classmethod
    def current(cls) -> 'ProjectContext':
        return cls.from_path(os.getcwd())

    @property
    def user(self) -> str:
        return f'{self.name}-user'

    @property
    def network_name(self) -> str:
        return f'{self.name}-default'

    @property
    def main_container_name(self) -> str:
        return self.container_name(self.name)

    def container_name(self, service: str) -> str:
        return f'{self.name}-{service}-{self.hash}'

    def network_aliases(self, service: str) -> list[str]:
        return [f'{self.name}-{service}', service]

    def is_project_container(self, container_name: str) -> bool:
        return container_name.startswith(f'{self.name}-') and container_name.endswith(f'-{self.hash}')
