"""
Async adapter over the Docker Engine API.

All engine calls go through DockerEngineInterface; every blocking docker-py
request runs in a worker thread. Drivers receive the interface as a parameter,
so any object with the same coroutine methods can stand in for the engine.
"""
import asyncio
import threading
from functools import partial
from typing import IO
from typing import AsyncIterator
from typing import Iterator

import docker
from docker import APIClient
from docker.errors import DockerException
from docker.utils import parse_repository_tag

from wizard.core.compose_data_types import ContainerSummary
from wizard.core.exec_types import ExecConfig
from wizard.errors.engine import ContainerNotFoundError
from wizard.errors.engine import EngineError

READ_CHUNK_SIZE = 4096

_ITERATION_END = object()


def engine_error(e: DockerException) -> EngineError:
    explanation = getattr(e, 'explanation', None)
    return EngineError(str(explanation or e))


async def iterate_in_thread(iterator: Iterator) -> AsyncIterator:
    """
    Drains a blocking iterator from a daemon thread into the running loop.
    Reads on an idle attach stream never return, so they stay out of the
    default executor which is joined on loop shutdown.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def publish(item, error=None) -> bool:
        try:
            loop.call_soon_threadsafe(queue.put_nowait, (item, error))
        except RuntimeError:
            # loop is closed
            return False
        return True

    def drain():
        try:
            for item in iterator:
                if not publish(item):
                    return
        except Exception as e:
            publish(None, e)
            return
        publish(_ITERATION_END)

    threading.Thread(target=drain, daemon=True).start()
    while True:
        item, error = await queue.get()
        if error is not None:
            raise error
        if item is _ITERATION_END:
            return
        yield item


class ExecSocket:
    def __init__(self, sock):
        # docker-py may hand back a SocketIO wrapper around the real socket
        self._sock = getattr(sock, '_sock', sock)

    def recv(self, size: int = READ_CHUNK_SIZE) -> bytes:
        return self._sock.recv(size)

    def send(self, data: bytes) -> None:
        self._sock.sendall(data)

    def close(self) -> None:
        self._sock.close()


class DockerEngineInterface:
    def __init__(self, client: APIClient = None):
        self._client = client

    @property
    def api(self) -> APIClient:
        if self._client is None:
            try:
                self._client = docker.from_env().api
            except DockerException as e:
                raise EngineError(f"Can't connect to docker engine: {e}") from None
        return self._client

    async def _call(self, method, *args, **kwargs):
        try:
            return await asyncio.to_thread(method, *args, **kwargs)
        except DockerException as e:
            raise engine_error(e) from None

    async def _iterate(self, stream: Iterator) -> AsyncIterator:
        try:
            async for item in iterate_in_thread(stream):
                yield item
        except DockerException as e:
            raise engine_error(e) from None

    # containers

    async def list_containers(self, name: str | None = None, running_only: bool = False
                              ) -> list[ContainerSummary]:
        filters = {}
        if name is not None:
            filters['name'] = name
        if running_only:
            filters['status'] = 'running'
        containers = await self._call(self.api.containers, all=True, filters=filters)
        return [ContainerSummary.from_api(container) for container in containers]

    async def get_container(self, name: str) -> ContainerSummary | None:
        for container in await self.list_containers(name=name):
            if name in container.names:
                return container
        return None

    async def get_running_container_id(self, name: str) -> str:
        for container in await self.list_containers(name=name, running_only=True):
            if name in container.names:
                return container.id
        raise ContainerNotFoundError(name)

    async def is_running(self, container: str) -> bool:
        state = (await self._call(self.api.inspect_container, container)).get('State') or {}
        return bool(state.get('Running'))

    async def create_container(self, name: str, image: str, command: list[str] | None = None,
                               user: str | None = None, environment: list[str] | None = None,
                               exposed_ports: list[tuple[str, str]] | None = None,
                               port_bindings: dict | None = None, mounts: list | None = None,
                               binds: list[str] | None = None, network: str | None = None,
                               aliases: list[str] | None = None, working_dir: str | None = None,
                               tty: bool = False) -> str:
        host_config = self.api.create_host_config(
            port_bindings=port_bindings,
            mounts=mounts,
            binds=binds,
            network_mode=network,
        )
        networking_config = None
        if network is not None:
            networking_config = self.api.create_networking_config({
                network: self.api.create_endpoint_config(aliases=aliases),
            })
        created = await self._call(
            self.api.create_container,
            image,
            command=command,
            name=name,
            user=user,
            environment=environment,
            ports=exposed_ports,
            host_config=host_config,
            networking_config=networking_config,
            working_dir=working_dir,
            tty=tty,
        )
        return created['Id']

    async def start_container(self, container: str) -> None:
        await self._call(self.api.start, container)

    async def stop_container(self, container: str) -> None:
        await self._call(self.api.stop, container)

    async def restart_container(self, container: str) -> None:
        await self._call(self.api.restart, container)

    async def remove_container(self, container: str, force: bool = True) -> None:
        await self._call(self.api.remove_container, container, force=force)

    async def attach_output(self, container: str) -> AsyncIterator[bytes]:
        stream: Iterator[bytes] = await self._call(
            self.api.attach, container, stdout=True, stderr=True, stream=True, logs=True
        )
        async for chunk in self._iterate(stream):
            yield chunk

    # networks

    async def list_networks(self) -> dict[str, str]:
        networks = await self._call(self.api.networks)
        return {network['Name']: network['Id'] for network in networks}

    async def create_network(self, name: str, driver: str = 'bridge') -> str:
        created = await self._call(self.api.create_network, name, driver=driver, check_duplicate=True)
        return created['Id']

    async def remove_network(self, name: str) -> None:
        await self._call(self.api.remove_network, name)

    # images

    async def list_image_tags(self) -> list[str]:
        images = await self._call(self.api.images, all=True)
        return [tag for image in images for tag in (image.get('RepoTags') or [])]

    async def remove_image(self, image: str) -> None:
        await self._call(self.api.remove_image, image, force=True)

    async def pull_image(self, image: str) -> None:
        repository, tag = parse_repository_tag(image)
        stream = await self._call(self.api.pull, repository, tag=tag or 'latest', stream=True, decode=True)
        async for progress in self._iterate(stream):
            if 'error' in progress:
                raise EngineError(progress['error'])

    async def build_image(self, tag: str, context: IO[bytes], dockerfile: str = 'Dockerfile') -> AsyncIterator[dict]:
        stream = await self._call(
            self.api.build,
            fileobj=context,
            custom_context=True,
            encoding='gzip',
            dockerfile=dockerfile,
            tag=tag,
            rm=True,
            decode=True,
        )
        async for build_info in self._iterate(stream):
            yield build_info

    # exec sessions

    async def create_exec(self, container: str, config: ExecConfig) -> str:
        created = await self._call(
            self.api.exec_create,
            container,
            config.command_args,
            stdout=True,
            stderr=True,
            stdin=config.attach_stdin,
            tty=True,
            user=config.user or '',
            environment=config.env,
            workdir=config.work_dir,
        )
        return created['Id']

    async def start_exec(self, exec_id: str) -> ExecSocket:
        sock = await self._call(self.api.exec_start, exec_id, tty=True, socket=True)
        return ExecSocket(sock)

    async def inspect_exec(self, exec_id: str) -> dict:
        return await self._call(self.api.exec_inspect, exec_id)

    async def resize_exec(self, exec_id: str, height: int, width: int) -> None:
        await self._call(self.api.exec_resize, exec_id, height=height, width=width)

    async def read_exec_output(self, sock: ExecSocket) -> AsyncIterator[bytes]:
        async for chunk in iterate_in_thread(iter(partial(sock.recv, READ_CHUNK_SIZE), b'')):
            yield chunk
