"""
Translation of compose shorthand (ports, volumes, environment) into
Engine API structures.
"""
import os
from pathlib import Path
from typing import NamedTuple

from docker.types import Mount

from wizard.core.utils.env_files import read_env_file
from wizard.errors.compose import ComposeFileError

DEFAULT_HOST_IP = '0.0.0.0'
DEFAULT_PROTOCOL = 'tcp'


class PortMapping(NamedTuple):
    container_port: str
    protocol: str = DEFAULT_PROTOCOL
    host_port: str | None = None
    host_ip: str = DEFAULT_HOST_IP

    @property
    def container_key(self) -> str:
        return f'{self.container_port}/{self.protocol}'


def parse_port(port: str | int) -> PortMapping:
    port = str(port)
    protocol = DEFAULT_PROTOCOL
    if '/' in port:
        port, protocol = port.rsplit('/', maxsplit=1)

    parts = port.split(':')
    match parts:
        case [container_port]:
            return PortMapping(container_port, protocol)
        case [host_port, container_port]:
            return PortMapping(container_port, protocol, host_port)
        case [host_ip, host_port, container_port]:
            return PortMapping(container_port, protocol, host_port, host_ip or DEFAULT_HOST_IP)
    raise ComposeFileError(f'Unsupported port mapping "{port}", expected "host:container"')


def extract_ports(dc_ports: list[str] | None) -> dict[str, list[tuple[str, str]]] | None:
    if not dc_ports:
        return None
    port_bindings = {}
    for port in dc_ports:
        mapping = parse_port(port)
        if mapping.host_port is None:
            continue
        port_bindings.setdefault(mapping.container_key, []).append((mapping.host_ip, mapping.host_port))
    return port_bindings or None


def extract_exposed_ports(dc_ports: list[str] | None) -> list[tuple[str, str]] | None:
    if not dc_ports:
        return None
    exposed = []
    for port in dc_ports:
        mapping = parse_port(port)
        if (item := (mapping.container_port, mapping.protocol)) not in exposed:
            exposed += [item]
    return exposed


def resolve_host_path(host_path: str, root: Path) -> str:
    if host_path == '.':
        return str(root)
    if host_path.startswith('./') or host_path.startswith('../'):
        return os.path.normpath(root / host_path)
    if host_path.startswith('~'):
        return os.path.expanduser(host_path)
    return host_path


def make_mount(source: str | None, target: str, declared_volumes: list[str], root: Path,
               read_only: bool = False, mount_type: str | None = None) -> Mount:
    if source is None:
        return Mount(target=target, source=None, type='volume', read_only=read_only)

    if mount_type is None:
        mount_type = 'volume' if source in declared_volumes else 'bind'
    if mount_type == 'bind':
        source = resolve_host_path(source, root)

    return Mount(
        target=target,
        source=source,
        type=mount_type,
        read_only=read_only,
        consistency='default',
    )


def parse_volume(volume: str | dict, declared_volumes: list[str], root: Path) -> Mount:
    if isinstance(volume, dict):
        if 'target' not in volume:
            raise ComposeFileError(f'Volume {volume} should have a target')
        return make_mount(
            volume.get('source'),
            volume['target'],
            declared_volumes,
            root,
            read_only=bool(volume.get('read_only', False)),
            mount_type=volume.get('type'),
        )

    parts = str(volume).split(':')
    match parts:
        case [target]:
            return make_mount(None, target, declared_volumes, root)
        case [source, target]:
            return make_mount(source, target, declared_volumes, root)
        case [source, target, mode]:
            return make_mount(source, target, declared_volumes, root, read_only='ro' in mode.split(','))
    raise ComposeFileError(f'Unsupported volume "{volume}", expected "host:container"')


def extract_volumes(dc_service_volumes: list[str | dict] | None,
                    dc_volumes: list[str],
                    root: Path) -> list[Mount] | None:
    if not dc_service_volumes:
        return None
    return [parse_volume(volume, dc_volumes, root) for volume in dc_service_volumes]


def inline_env(environment: dict | list | None) -> list[str]:
    if environment is None:
        return []
    if isinstance(environment, dict):
        for key, value in environment.items():
            if isinstance(value, bool):
                raise ComposeFileError(
                    f'Environment variable {key} has boolean value {value}, quote it to pass "{str(value).lower()}"'
                )
        return [
            f'{key}={"" if value is None else value}'
            for key, value in environment.items()
        ]
    if isinstance(environment, list):
        return [str(item) for item in environment]
    raise ComposeFileError(f'Unsupported environment "{environment}", expected mapping or list')


def extract_env(environment: dict | list | None, env_files: list[str], root: Path) -> list[str] | None:
    env = []
    for env_file in env_files:
        env += read_env_file(root / env_file)
    env += inline_env(environment)
    return env or None
