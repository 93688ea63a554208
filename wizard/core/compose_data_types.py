from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from rich.text import Text

from wizard.output.styles import Style


class ContainerState:
    RUNNING = 'running'
    PAUSED = 'paused'
    EXITED = 'exited'
    CREATED = 'created'


@dataclass(frozen=True)
class ServiceDeclaration:
    name: str
    image: str | None = None
    build: Any = None
    command: list[str] | None = None
    ports: list[str] = field(default_factory=list)
    volumes: list[str | dict] = field(default_factory=list)
    environment: dict | list | None = None
    env_files: list[str] = field(default_factory=list)

    @property
    def needs_build(self) -> bool:
        return self.image is None


@dataclass(frozen=True)
class ComposeDocument:
    path: Path
    services: list[ServiceDeclaration]
    volumes: list[str] = field(default_factory=list)
    version: str | None = None

    def service_names(self) -> list[str]:
        return [service.name for service in self.services]


@dataclass
class ContainerSummary:
    id: str
    names: list[str]
    state: str
    image: str
    status: str = ''

    @classmethod
    def from_api(cls, container: dict) -> 'ContainerSummary':
        return cls(
            id=container['Id'],
            names=[name.lstrip('/') for name in container.get('Names') or []],
            state=container.get('State', ''),
            image=container.get('Image', ''),
            status=container.get('Status', ''),
        )

    @property
    def name(self) -> str:
        return ', '.join(self.names)

    @property
    def is_running(self) -> bool:
        return self.state == ContainerState.RUNNING

    def as_rich_text(self, style: Style = Style()) -> Text:
        match self.state:
            case ContainerState.RUNNING:
                state_style = style.good
            case ContainerState.PAUSED:
                state_style = style.suspicious
            case ContainerState.EXITED:
                state_style = style.bad
            case _:
                state_style = style.regular
        return (Text(self.name, style=style.label)
                .append(Text(' ['))
                .append(Text(self.state, style=state_style))
                .append(Text(f'] - Image: {self.image}', style=style.regular)))
