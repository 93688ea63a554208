"""
New project generation inside a throwaway container.

The framework toolchain image is pulled, a container is started with the
current directory bound into it, the generator commands run there as a user
matching the host uid, and the docker files for the new project are written
next to the generated sources. The container is removed afterwards whatever
happened.
"""
from pathlib import Path
from typing import IO
from typing import NamedTuple

from rich.console import Console
from rich.text import Text
from rtry import retry

from wizard.core.config import Config
from wizard.core.engine_interface import DockerEngineInterface
from wizard.core.exec_session import run_container_command
from wizard.core.exec_types import ExecConfig
from wizard.errors import WizardError
from wizard.errors.scaffold import ScaffoldContainerNotReadyError
from wizard.errors.scaffold import ScaffoldError
from wizard.errors.scaffold import ScaffoldFileError
from wizard.output.console import CONSOLE
from wizard.output.progress import Spinner
from wizard.output.styles import Style


class ScaffoldFile(NamedTuple):
    name: str
    content: str


class ScaffoldContainer(NamedTuple):
    name: str
    image: str
    work_dir: str
    binds: list[str]
    mounts: list | None = None


def error_text(message: str | Text) -> Text:
    return Text('[').append(Text('error', style=Style.error)).append('] - ').append(message)


class ProjectScaffolder:
    def __init__(self,
                 root: Path,
                 engine: DockerEngineInterface = None,
                 config=Config,
                 console: Console = CONSOLE,
                 stdin: IO = None,
                 stdout: IO = None):
        cfg = config()
        self._root = root
        self._engine = engine if engine is not None else DockerEngineInterface()
        self._ready_attempts = cfg.scaffold_ready_attempts
        self._ready_delay = cfg.scaffold_ready_delay
        self._console = console
        self._stdin = stdin
        self._stdout = stdout

    async def wait_running(self, container_id: str):
        is_running = retry(
            attempts=self._ready_attempts,
            delay=self._ready_delay,
            until=lambda running: not running,
        )(self._engine.is_running)
        if not await is_running(container_id):
            raise ScaffoldContainerNotReadyError(container_id)

    async def prepare_container(self, container: ScaffoldContainer) -> str:
        with Spinner(f'Pulling {container.image}', self._console) as spinner:
            await self._engine.pull_image(container.image)
            spinner.finish(container.image, 'pulled')

        container_id = await self._engine.create_container(
            name=container.name,
            image=container.image,
            binds=container.binds,
            mounts=container.mounts,
            working_dir=container.work_dir,
            tty=True,
        )
        try:
            await self._engine.start_container(container_id)
            await self.wait_running(container_id)
        except WizardError:
            await self.remove_container(container_id)
            raise
        return container_id

    async def remove_container(self, container_id: str):
        try:
            await self._engine.remove_container(container_id, force=True)
        except WizardError as e:
            self._console.print(f'Error removing {container_id}: {e.message}')
            self._console.print(
                f'You may need to remove the container manually using "docker rm {container_id}"'
            )

    async def run_steps(self, container_id: str, steps: list[ExecConfig]):
        for step in steps:
            try:
                await run_container_command(self._engine, container_id, step, stdin=self._stdin, stdout=self._stdout)
            except WizardError as e:
                self._console.print(error_text(
                    Text('failed to execute command: ').append(Text(step.command_line(), style=Style.label))
                ))
                self._console.print(error_text(
                    Text('Error from command: ').append(Text(e.message, style=Style.bad))
                ))
                raise ScaffoldError(f'failed to execute command: {step.command_line()}\n{e.message}') from None

    def write_files(self, project_name: str, files: list[ScaffoldFile]):
        project_dir = self._root / project_name
        if not project_dir.is_dir():
            self._console.print(error_text(
                Text(f'Could not create files in {project_name}: project folder does not exist. '
                     f'Likely due to errors creating project', style=Style.bad)
            ))
            raise ScaffoldFileError(project_name, 'project folder does not exist')

        for file in files:
            try:
                (project_dir / file.name).write_text(file.content)
            except OSError as e:
                self._console.print(error_text(
                    Text('Could not write to file: ').append(Text(file.name, style=Style.label))
                    .append(Text(f' - {e.strerror or e}', style=Style.bad))
                ))
                raise ScaffoldFileError(file.name, e.strerror or str(e)) from None

    async def scaffold(self, project_name: str, container: ScaffoldContainer,
                       steps: list[ExecConfig], files: list[ScaffoldFile]):
        container_id = await self.prepare_container(container)
        try:
            await self.run_steps(container_id, steps)
            self.write_files(project_name, files)
        finally:
            await self.remove_container(container_id)
