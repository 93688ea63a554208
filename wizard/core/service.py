import warnings
from pathlib import Path
from typing import IO

from rich.console import Console
from rich.text import Text

from wizard.core.compose_data_types import ComposeDocument
from wizard.core.compose_data_types import ContainerSummary
from wizard.core.compose_data_types import ServiceDeclaration
from wizard.core.config import Config
from wizard.core.engine_interface import DockerEngineInterface
from wizard.core.exec_session import run_container_command
from wizard.core.exec_types import ExecConfig
from wizard.core.log_streams import stream_logs
from wizard.core.project import ProjectContext
from wizard.core.utils.build_context import make_build_context
from wizard.core.utils.compose_files import parse_docker_compose
from wizard.core.utils.compose_translation import extract_env
from wizard.core.utils.compose_translation import extract_exposed_ports
from wizard.core.utils.compose_translation import extract_ports
from wizard.core.utils.compose_translation import extract_volumes
from wizard.errors.engine import EngineError
from wizard.errors.engine import ImageBuildError
from wizard.errors.engine import NothingStartedError
from wizard.helpers.jobs_result import JobResult
from wizard.helpers.jobs_result import OperationError
from wizard.output.console import CONSOLE
from wizard.output.progress import Spinner
from wizard.output.progress import wizard_status_text
from wizard.output.styles import Style

DEFAULT_TAG = 'latest'


def with_default_tag(image: str) -> str:
    if ':' in image.rsplit('/', maxsplit=1)[-1]:
        return image
    return f'{image}:{DEFAULT_TAG}'


class WizardComposeService:
    """
    Compose-like workflow over a single project directory.

    Containers are named "{project}-{service}-{hash}" and attached to the
    "{project}-default" bridge network, so everything the project owns can be
    found again by name.
    """

    def __init__(self,
                 context: ProjectContext,
                 engine: DockerEngineInterface = None,
                 config=Config,
                 console: Console = CONSOLE,
                 stdin: IO = None,
                 stdout: IO = None):
        cfg = config()
        self._context = context
        self._engine = engine if engine is not None else DockerEngineInterface()
        self._compose_file_names = cfg.compose_file_names
        self._dockerfile = cfg.dockerfile
        self._shell = cfg.shell
        self._log_width = cfg.log_width
        self._console = console
        self._stdin = stdin
        self._stdout = stdout
        self._document: ComposeDocument | None = None

    @property
    def context(self) -> ProjectContext:
        return self._context

    def compose_document(self) -> ComposeDocument:
        if self._document is None:
            self._document = parse_docker_compose(self._context.path, self._compose_file_names)
        return self._document

    async def ensure_network(self) -> str:
        networks = await self._engine.list_networks()
        if (network_id := networks.get(self._context.network_name)) is not None:
            return network_id
        return await self._engine.create_network(self._context.network_name, driver='bridge')

    async def project_containers(self) -> list[ContainerSummary]:
        return [
            container
            for container in await self._engine.list_containers(name=f'{self._context.name}-')
            if any(self._context.is_project_container(name) for name in container.names)
        ]

    # up

    async def up(self, detached: bool = False) -> list[str]:
        document = self.compose_document()
        await self.ensure_network()

        started_containers = []
        for service in document.services:
            container_name = self._context.container_name(service.name)
            existing = await self._engine.get_container(container_name)

            if existing is not None and existing.is_running:
                continue

            if existing is not None:
                await self.ensure_network()
                started = await self._start_container(container_name, existing.id)
            else:
                started = await self._create_and_start(service, container_name, document)

            if started:
                started_containers += [container_name]

        if detached:
            return started_containers

        if not started_containers:
            raise NothingStartedError()

        await stream_logs(self._engine, started_containers, self._console, columns=self._log_width)
        return started_containers

    async def _start_container(self, container_name: str, container_id: str) -> bool:
        with Spinner(f'Starting {container_name}', self._console) as spinner:
            try:
                await self._engine.start_container(container_id)
            except EngineError as e:
                spinner.abandon(container_name)
                self._console.print(Text(e.message, style=Style.bad))
                return False
            spinner.finish(container_name, 'started')
        return True

    async def _create_and_start(self, service: ServiceDeclaration, container_name: str,
                                document: ComposeDocument) -> bool:
        root = self._context.path
        user = None
        if service.needs_build:
            await self.build_service_image(service)
            image = service.name
            user = self._context.user
        else:
            image = service.image
            await self.ensure_image(image)

        container_id = await self._engine.create_container(
            name=container_name,
            image=image,
            command=service.command,
            user=user,
            environment=extract_env(service.environment, service.env_files, root),
            exposed_ports=extract_exposed_ports(service.ports),
            port_bindings=extract_ports(service.ports),
            mounts=extract_volumes(service.volumes, document.volumes, root),
            network=self._context.network_name,
            aliases=self._context.network_aliases(service.name),
        )
        return await self._start_container(container_name, container_id)

    # images

    async def ensure_image(self, image: str):
        if with_default_tag(image) in await self._engine.list_image_tags():
            return
        with Spinner(f'Pulling {image}', self._console) as spinner:
            try:
                await self._engine.pull_image(image)
            except EngineError:
                spinner.abandon(image)
                raise
            spinner.finish(image, 'pulled')

    def _warn_on_foreign_build(self, service: ServiceDeclaration):
        build = service.build
        if isinstance(build, dict):
            context, dockerfile = build.get('context', '.'), build.get('dockerfile', self._dockerfile)
        else:
            context, dockerfile = build or '.', self._dockerfile
        if Path(self._context.path, str(context)).resolve() != self._context.path.resolve() \
                or dockerfile != self._dockerfile:
            warnings.warn(
                f'⚠️ service {service.name} declares build context "{context}" with "{dockerfile}", '
                f'only the project {self._dockerfile} is supported and will be used'
            )

    async def build_service_image(self, service: ServiceDeclaration):
        tag = service.name
        self._warn_on_foreign_build(service)
        if not (self._context.path / self._dockerfile).is_file():
            raise ImageBuildError(
                tag,
                f'Could not read {self._dockerfile}. Make sure to run this command from the root of the project.'
            )

        with make_build_context(self._context.path, self._dockerfile) as context, \
                Spinner(f'building {tag}', self._console) as spinner:
            async for build_info in self._engine.build_image(tag, context, self._dockerfile):
                if (stream := build_info.get('stream')) and stream != '\n':
                    spinner.println(wizard_status_text(stream.lstrip('\n').rstrip('\n')))
                if error := build_info.get('error'):
                    spinner.abandon(tag)
                    raise ImageBuildError(tag, error)
            spinner.finish(tag, 'built')

    async def remove_image(self, tag: str) -> JobResult | OperationError | None:
        if with_default_tag(tag) not in await self._engine.list_image_tags():
            return None
        with Spinner(f'Removing {tag}', self._console) as spinner:
            try:
                await self._engine.remove_image(tag)
            except EngineError as e:
                spinner.abandon(f'{tag} image')
                return OperationError(tag, e.message)
            spinner.finish(f'{tag} image', 'removed')
        return JobResult.GOOD

    # down / build / restart

    async def down(self) -> dict[str, JobResult | OperationError]:
        results = {}
        for container in await self.project_containers():
            name = container.names[0]
            with Spinner(f'Stopping {name}', self._console) as spinner:
                try:
                    if await self._engine.is_running(name):
                        await self._engine.stop_container(name)
                    await self._engine.remove_container(name, force=True)
                except EngineError as e:
                    spinner.abandon(name)
                    self._console.print(Text(e.message, style=Style.bad))
                    results[name] = OperationError(name, e.message)
                    continue
                spinner.finish(name, 'stopped')
                results[name] = JobResult.GOOD

        if self._context.network_name in await self._engine.list_networks():
            await self._engine.remove_network(self._context.network_name)
        return results

    async def build(self, force: bool = False) -> list[str]:
        await self.down()
        built = []
        for service in self.compose_document().services:
            if not service.needs_build:
                continue
            if force:
                await self.remove_image(service.name)
            await self.build_service_image(service)
            built += [service.name]
        return built

    async def restart(self) -> dict[str, JobResult | OperationError]:
        results = {}
        for container in await self.project_containers():
            name = container.names[0]
            with Spinner(f'Restarting {name}', self._console) as spinner:
                try:
                    await self._engine.restart_container(name)
                except EngineError as e:
                    spinner.abandon(name)
                    results[name] = OperationError(name, e.message)
                    continue
                spinner.finish(name, 'restarted')
                results[name] = JobResult.GOOD
        return results

    # status

    async def status(self) -> list[ContainerSummary]:
        declared = [self._context.container_name(name) for name in self.compose_document().service_names()]
        containers = [
            container
            for container in await self._engine.list_containers(name=f'{self._context.name}-')
            if any(name in declared for name in container.names)
        ]

        existing_names = [name for container in containers for name in container.names]
        stopped = [name for name in declared if name not in existing_names]

        for container in containers:
            self._console.print(wizard_status_text(container.as_rich_text()))
        for name in stopped:
            self._console.print(wizard_status_text(
                Text(name, style=Style.label).append(Text(' [')).append(Text('stopped', style=Style.bad))
                .append(Text(']'))
            ))

        if not containers:
            self._console.print(wizard_status_text(Text('Project not running', style=Style.bad)))
        elif stopped:
            self._console.print(
                Text('[Wizard]::').append(Text('Warning', style=Style.suspicious))
                .append(' - This project defines services currently not running.')
            )
            self._console.print(
                Text('[Wizard]::').append(Text('Warning', style=Style.suspicious))
                .append(' - If this is intentional this message can be safely ignored')
            )
        return containers

    # exec

    async def exec_in_container(self, container_name: str, config: ExecConfig):
        container_id = await self._engine.get_running_container_id(container_name)
        await run_container_command(self._engine, container_id, config, stdin=self._stdin, stdout=self._stdout)

    async def exec_in_main_container(self, command_args: list[str]):
        await self.exec_in_container(
            self._context.main_container_name,
            ExecConfig(command_args, user=self._context.user, attach_stdin=True),
        )

    async def shell(self, container_name: str | None = None, user: str | None = None):
        await self.exec_in_container(
            container_name or self._context.main_container_name,
            ExecConfig([self._shell], user=user or self._context.user, attach_stdin=True),
        )
