from enum import Enum
from pathlib import Path
from typing import IO

from docker.types import Mount
from rich.console import Console

from wizard.core.config import Config
from wizard.core.engine_interface import DockerEngineInterface
from wizard.core.exec_types import ExecConfig
from wizard.core.service import WizardComposeService
from wizard.output.console import CONSOLE
from wizard.scaffold.scaffold_runner import ProjectScaffolder
from wizard.scaffold.scaffold_runner import ScaffoldContainer
from wizard.scaffold.scaffold_runner import ScaffoldFile
from wizard.scaffold.templates import rails_compose_file
from wizard.scaffold.templates import rails_dockerfile

SCAFFOLD_CONTAINER = 'rails-create-container'

# gem caches live in the container tmpfs so the host stays clean
GEM_ENV = ['GEM_PATH=/tmp/gem', 'GEM_SPEC_CACHE=/tmp/gem/cache']


class Database(str, Enum):
    postgresql = 'postgresql'
    mysql = 'mysql'
    sqlite3 = 'sqlite3'


def rails_new_args(name: str, api: bool, database: Database | None) -> list[str]:
    args = ['rails', 'new', name]
    if api:
        args += ['--api']
    if database is not None:
        args += [f'--database={database.value}']
    else:
        args += ['--skip-active-record']
    return args


def rails_steps(name: str, user: str, work_dir: str, api: bool, database: Database | None) -> list[ExecConfig]:
    return [
        ExecConfig(['groupadd', '-r', user, '-g', '1000']),
        ExecConfig(['useradd', '-u', '1000', '-g', user, user]),
        ExecConfig(
            ['gem', 'install', 'rails', '--no-document', '--no-user-install'],
            user=user,
            env=GEM_ENV,
        ),
        ExecConfig(
            rails_new_args(name, api, database),
            user=user,
            work_dir=work_dir,
            attach_stdin=True,
            env=GEM_ENV + ['HOME=/tmp'],
        ),
        ExecConfig(
            ['bundle', 'add', 'pry-rails', '--group=development'],
            user=user,
            work_dir=f'{work_dir}/{name}',
            attach_stdin=True,
            env=GEM_ENV + ['HOME=/tmp'],
        ),
    ]


def rails_files(name: str, user: str, database: Database | None) -> list[ScaffoldFile]:
    return [
        ScaffoldFile('Dockerfile', rails_dockerfile(user, sqlite3=database == Database.sqlite3)),
        ScaffoldFile('docker-compose.yml', rails_compose_file(name, database.value if database else None)),
        ScaffoldFile('.env', ''),
    ]


async def rails_new(name: str, api: bool = False, database: Database | None = None,
                    root: Path = None, engine: DockerEngineInterface = None, config=Config,
                    console: Console = CONSOLE, stdin: IO = None, stdout: IO = None):
    root = root or Path.cwd()
    user = f'{name}-user'
    work_dir = f'/home/{user}'

    container = ScaffoldContainer(
        name=SCAFFOLD_CONTAINER,
        image=config().rails_image,
        work_dir=work_dir,
        binds=[f'{root}:{work_dir}:rw'],
        mounts=[Mount(target='/tmp', source=None, type='tmpfs', read_only=False)],
    )
    scaffolder = ProjectScaffolder(root, engine=engine, config=config, console=console, stdin=stdin, stdout=stdout)
    await scaffolder.scaffold(
        name,
        container,
        steps=rails_steps(name, user, work_dir, api, database),
        files=rails_files(name, user, database),
    )


async def rails_cmd(service: WizardComposeService, args: list[str]):
    await service.exec_in_main_container(['rails', *args])
