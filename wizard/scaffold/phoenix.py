import getpass
from pathlib import Path
from typing import IO

from rich.console import Console

from wizard.core.config import Config
from wizard.core.engine_interface import DockerEngineInterface
from wizard.core.exec_types import ExecConfig
from wizard.core.service import WizardComposeService
from wizard.output.console import CONSOLE
from wizard.scaffold.scaffold_runner import ProjectScaffolder
from wizard.scaffold.scaffold_runner import ScaffoldContainer
from wizard.scaffold.scaffold_runner import ScaffoldFile
from wizard.scaffold.templates import phoenix_compose_file
from wizard.scaffold.templates import phoenix_dockerfile

SCAFFOLD_CONTAINER = 'phoenix-create-container'


def phoenix_steps(name: str, user: str, work_dir: str) -> list[ExecConfig]:
    return [
        ExecConfig(['groupadd', '-r', user, '-g', '1000']),
        ExecConfig(['useradd', '-u', '1000', '-g', user, user]),
        ExecConfig(['mix', 'local.hex', '--force'], user=user),
        ExecConfig(['mix', 'archive.install', 'hex', 'phx_new', '--force'], user=user),
        ExecConfig(['mix', 'phx.new', name, '--install'], user=user, work_dir=work_dir, attach_stdin=True),
    ]


def phoenix_files(name: str) -> list[ScaffoldFile]:
    return [
        ScaffoldFile('Dockerfile', phoenix_dockerfile(f'{name}-user')),
        ScaffoldFile('docker-compose.yml', phoenix_compose_file(name)),
        ScaffoldFile('.env', ''),
    ]


async def phoenix_new(name: str, root: Path = None, engine: DockerEngineInterface = None, config=Config,
                      console: Console = CONSOLE, stdin: IO = None, stdout: IO = None):
    root = root or Path.cwd()
    user = getpass.getuser()
    work_dir = f'/home/{user}'

    container = ScaffoldContainer(
        name=SCAFFOLD_CONTAINER,
        image=config().phoenix_image,
        work_dir=work_dir,
        binds=[f'{root}:{work_dir}:rw'],
    )
    scaffolder = ProjectScaffolder(root, engine=engine, config=config, console=console, stdin=stdin, stdout=stdout)
    await scaffolder.scaffold(
        name,
        container,
        steps=phoenix_steps(name, user, work_dir),
        files=phoenix_files(name),
    )


async def phoenix_cmd(service: WizardComposeService, args: list[str]):
    await service.exec_in_main_container(args)
