import re
import shlex
from pathlib import Path

import yaml
from yaml import YAMLError

from wizard.core.compose_data_types import ComposeDocument
from wizard.core.compose_data_types import ServiceDeclaration
from wizard.errors.compose import ComposeFileError
from wizard.errors.compose import ComposeFileNotFoundError
from wizard.errors.compose import MissingServicesError
from wizard.errors.compose import UnsupportedCommandError
from wizard.errors.compose import UnsupportedComposeVersionError

MIN_COMPOSE_VERSION = 3

INT_TAG = 'tag:yaml.org,2002:int'


class ComposeLoader(yaml.FullLoader):
    """
    FullLoader without YAML 1.1 base 60 integers, so "22:22" stays a string.
    """


ComposeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != INT_TAG]
    for first, resolvers in yaml.FullLoader.yaml_implicit_resolvers.items()
}
ComposeLoader.add_implicit_resolver(
    INT_TAG,
    re.compile(r"^(?:[-+]?0b[0-1_]+|[-+]?0[0-7_]+|[-+]?(?:0|[1-9][0-9_]*)|[-+]?0x[0-9a-fA-F_]+)$"),
    list('-+0123456789'),
)


def read_dc_file(filename: str | Path) -> dict:
    with open(filename) as f:
        return yaml.load(f, Loader=ComposeLoader)


def find_compose_file(root: Path, file_names: list[str]) -> Path:
    for file_name in file_names:
        if (path := root / file_name).is_file():
            return path
    raise ComposeFileNotFoundError(root, file_names)


def check_compose_version(version) -> str | None:
    if version is None:
        return None
    version = str(version)
    major = version.split('.', maxsplit=1)[0]
    if not major.isdigit() or int(major) < MIN_COMPOSE_VERSION:
        raise UnsupportedComposeVersionError(version)
    return version


def parse_command(service: str, command) -> list[str] | None:
    if command is None:
        return None
    if isinstance(command, str):
        try:
            return shlex.split(command)
        except ValueError:
            raise UnsupportedCommandError(service, command) from None
    if isinstance(command, list) and all(isinstance(arg, str) for arg in command):
        return list(command)
    raise UnsupportedCommandError(service, command)


def as_list(value) -> list:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def parse_service(name: str, service_cfg: dict | None) -> ServiceDeclaration:
    if not isinstance(service_cfg, dict):
        raise ComposeFileError(f'Service {name} must have config')
    return ServiceDeclaration(
        name=name,
        image=service_cfg.get('image'),
        build=service_cfg.get('build'),
        command=parse_command(name, service_cfg.get('command')),
        ports=[str(port) for port in as_list(service_cfg.get('ports'))],
        volumes=as_list(service_cfg.get('volumes')),
        environment=service_cfg.get('environment'),
        env_files=[str(env_file) for env_file in as_list(service_cfg.get('env_file'))],
    )


def parse_dc_cfg(path: Path, dc_cfg) -> ComposeDocument:
    if not isinstance(dc_cfg, dict):
        raise ComposeFileError(f'Compose file {path} should be a mapping')

    version = check_compose_version(dc_cfg.get('version'))

    services = dc_cfg.get('services')
    if not services:
        raise MissingServicesError(path)
    if not isinstance(services, dict):
        raise ComposeFileError(f'Services in {path} should be a mapping')

    return ComposeDocument(
        path=path,
        version=version,
        services=[parse_service(str(name), cfg) for name, cfg in services.items()],
        volumes=[str(volume) for volume in (dc_cfg.get('volumes') or {})],
    )


def parse_docker_compose(root: Path, file_names: list[str]) -> ComposeDocument:
    path = find_compose_file(root, file_names)
    try:
        dc_cfg = read_dc_file(path)
    except YAMLError as e:
        raise ComposeFileError(f'Compose file {path} is not valid yaml:\n{e}') from None
    return parse_dc_cfg(path, dc_cfg)
