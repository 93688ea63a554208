import asyncio
import codecs
import shutil
from typing import Any
from typing import AsyncIterator

from rich.console import Console
from rich.text import Text

from wizard.output.console import CONSOLE
from wizard.output.styles import LABEL_PALETTE

LABEL_SEPARATOR = ' | '

_STREAM_END = object()


class LogLineDecoder:
    """
    Turns container output chunks into complete lines. A trailing partial line
    and a multibyte character cut between chunks wait for the next chunk.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
        self._pending = ''

    def feed(self, chunk: bytes) -> list[str]:
        *lines, self._pending = (self._pending + self._decoder.decode(chunk)).split('\n')
        return lines

    def flush(self) -> list[str]:
        rest = self._pending + self._decoder.decode(b'', final=True)
        self._pending = ''
        return [rest] if rest else []


def label_width(names: list[str]) -> int:
    return max((len(name) for name in names), default=0)


def label_styles(names: list[str]) -> dict[str, str]:
    return {name: LABEL_PALETTE[i % len(LABEL_PALETTE)] for i, name in enumerate(names)}


def wrap_line(line: str, budget: int) -> list[str]:
    if budget <= 0 or len(line) <= budget:
        return [line]
    return [line[i:i + budget] for i in range(0, len(line), budget)]


def split_log_lines(lines: list[str], budget: int) -> list[str]:
    pieces = []
    for line in lines:
        line = line.rstrip('\r')
        if not line:
            continue
        pieces += [piece for piece in wrap_line(line, budget) if piece]
    return pieces


def format_log_lines(lines: list[str], name: str, width: int, columns: int, style: str) -> list[Text]:
    budget = columns - width - len(LABEL_SEPARATOR)
    return [
        Text().append(f'{name:<{width}}', style=style).append(f'{LABEL_SEPARATOR}{line}')
        for line in split_log_lines(lines, budget)
    ]


async def decoded_lines(stream: AsyncIterator[bytes]) -> AsyncIterator[list[str]]:
    decoder = LogLineDecoder()
    async for chunk in stream:
        if lines := decoder.feed(chunk):
            yield lines
    if lines := decoder.flush():
        yield lines


async def multiplex(streams: dict[str, AsyncIterator[Any]]) -> AsyncIterator[tuple[str, Any]]:
    """
    Interleaves independent streams as (name, item) pairs in arrival order.
    Ends once every stream has ended.
    """
    queue: asyncio.Queue = asyncio.Queue()

    async def drain(name: str, stream: AsyncIterator[Any]):
        try:
            async for chunk in stream:
                await queue.put((name, chunk))
        finally:
            await queue.put((name, _STREAM_END))

    tasks = [asyncio.create_task(drain(name, stream)) for name, stream in streams.items()]
    active = len(tasks)
    try:
        while active:
            name, chunk = await queue.get()
            if chunk is _STREAM_END:
                active -= 1
                continue
            yield name, chunk
    finally:
        for task in tasks:
            task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)

    for result in results:
        if isinstance(result, Exception):
            raise result


async def stream_logs(engine, containers: list[str], console: Console = CONSOLE, columns: int | None = None):
    width = label_width(containers)
    styles = label_styles(containers)
    streams = {container: decoded_lines(engine.attach_output(container)) for container in containers}

    async for container, lines in multiplex(streams):
        screen_columns = columns or shutil.get_terminal_size().columns
        for line in format_log_lines(lines, container, width, screen_columns, styles[container]):
            console.print(line, soft_wrap=True)
