from typing import IO

from wizard.core.compose_data_types import ContainerState
from wizard.core.compose_data_types import ContainerSummary
from wizard.core.exec_types import ExecConfig
from wizard.core.service import with_default_tag
from wizard.errors.engine import ContainerNotFoundError
from wizard.errors.engine import EngineError


class FakeExecSocket:
    def __init__(self, output: list[bytes]):
        self.output = list(output)
        self.sent = []
        self.closed = False

    def recv(self, size: int = 4096) -> bytes:
        return self.output.pop(0) if self.output else b''

    def send(self, data: bytes) -> None:
        self.sent += [data]

    def close(self) -> None:
        self.closed = True


class FakeEngine:
    """
    In-memory engine with the DockerEngineInterface coroutine surface.
    """

    def __init__(self, images: list[str] = None):
        self.containers: dict[str, dict] = {}
        self.networks: dict[str, str] = {}
        self.images: list[str] = [with_default_tag(image) for image in images or []]
        self.logs: dict[str, list[bytes]] = {}
        self.build_output: list[dict] = [{'stream': 'Step 1/1 : FROM ruby:3.1\n'}]
        self.exec_output: list[bytes] = []
        self.exec_exit_code = 0
        self.exec_exit_codes: dict[str, int] = {}
        self.failures: dict[tuple[str, str], str] = {}
        self.calls: list[tuple] = []
        self.execs: dict[str, tuple[str, ExecConfig]] = {}
        self.sockets: list[FakeExecSocket] = []
        self.builds: list[dict] = []

    # test setup

    def add_container(self, name: str, image: str = 'busybox:latest', state: str = ContainerState.RUNNING) -> str:
        container_id = f'id-{name}'
        self.containers[name] = {'id': container_id, 'image': image, 'state': state, 'config': {}}
        return container_id

    def fail(self, operation: str, target: str, message: str = 'engine failure'):
        self.failures[(operation, target)] = message

    def state_of(self, name: str) -> str | None:
        container = self.containers.get(name)
        return container['state'] if container else None

    def calls_of(self, operation: str) -> list[tuple]:
        return [call[1:] for call in self.calls if call[0] == operation]

    # internals

    def _record(self, operation: str, *args):
        self.calls += [(operation, *args)]
        if (message := self.failures.get((operation, args[0] if args else ''))) is not None:
            raise EngineError(message)

    def _name(self, container: str) -> str:
        for name, info in self.containers.items():
            if container in (name, info['id']):
                return name
        raise EngineError(f'No such container: {container}')

    def _summary(self, name: str) -> ContainerSummary:
        info = self.containers[name]
        return ContainerSummary(id=info['id'], names=[name], state=info['state'], image=info['image'])

    # containers

    async def list_containers(self, name: str | None = None, running_only: bool = False) -> list[ContainerSummary]:
        return [
            self._summary(container_name)
            for container_name, info in self.containers.items()
            if (name is None or name in container_name)
            and (not running_only or info['state'] == ContainerState.RUNNING)
        ]

    async def get_container(self, name: str) -> ContainerSummary | None:
        return self._summary(name) if name in self.containers else None

    async def get_running_container_id(self, name: str) -> str:
        if self.state_of(name) != ContainerState.RUNNING:
            raise ContainerNotFoundError(name)
        return self.containers[name]['id']

    async def is_running(self, container: str) -> bool:
        return self.state_of(self._name(container)) == ContainerState.RUNNING

    async def create_container(self, name: str, image: str, **config) -> str:
        self._record('create_container', name, image, config)
        if name in self.containers:
            raise EngineError(f'Conflict. The container name "/{name}" is already in use')
        container_id = self.add_container(name, image=image, state=ContainerState.CREATED)
        self.containers[name]['config'] = config
        return container_id

    async def start_container(self, container: str) -> None:
        name = self._name(container)
        self._record('start_container', name)
        self.containers[name]['state'] = ContainerState.RUNNING

    async def stop_container(self, container: str) -> None:
        name = self._name(container)
        self._record('stop_container', name)
        self.containers[name]['state'] = ContainerState.EXITED

    async def restart_container(self, container: str) -> None:
        name = self._name(container)
        self._record('restart_container', name)
        self.containers[name]['state'] = ContainerState.RUNNING

    async def remove_container(self, container: str, force: bool = True) -> None:
        name = self._name(container)
        self._record('remove_container', name)
        del self.containers[name]

    async def attach_output(self, container: str):
        name = self._name(container)
        self._record('attach_output', name)
        for chunk in self.logs.get(name, []):
            yield chunk

    # networks

    async def list_networks(self) -> dict[str, str]:
        return dict(self.networks)

    async def create_network(self, name: str, driver: str = 'bridge') -> str:
        self._record('create_network', name, driver)
        self.networks[name] = f'net-{name}'
        return self.networks[name]

    async def remove_network(self, name: str) -> None:
        self._record('remove_network', name)
        del self.networks[name]

    # images

    async def list_image_tags(self) -> list[str]:
        return list(self.images)

    async def remove_image(self, image: str) -> None:
        self._record('remove_image', image)
        self.images.remove(with_default_tag(image))

    async def pull_image(self, image: str) -> None:
        self._record('pull_image', image)
        self.images += [with_default_tag(image)]

    async def build_image(self, tag: str, context: IO[bytes], dockerfile: str = 'Dockerfile'):
        self._record('build_image', tag)
        self.builds += [{'tag': tag, 'context': context.read(), 'dockerfile': dockerfile}]
        for build_info in self.build_output:
            yield build_info
        if not any('error' in build_info for build_info in self.build_output):
            self.images += [with_default_tag(tag)]

    # exec sessions

    async def create_exec(self, container: str, config: ExecConfig) -> str:
        self._record('create_exec', container, config)
        exec_id = f'exec-{len(self.execs)}'
        self.execs[exec_id] = (container, config)
        return exec_id

    async def start_exec(self, exec_id: str) -> FakeExecSocket:
        sock = FakeExecSocket(self.exec_output)
        self.sockets += [sock]
        return sock

    async def inspect_exec(self, exec_id: str) -> dict:
        container, config = self.execs[exec_id]
        exit_code = self.exec_exit_codes.get(config.command_line(), self.exec_exit_code)
        return {'ExitCode': exit_code, 'Running': False}

    async def resize_exec(self, exec_id: str, height: int, width: int) -> None:
        self._record('resize_exec', exec_id, height, width)

    async def read_exec_output(self, sock: FakeExecSocket):
        while chunk := sock.recv():
            yield chunk
