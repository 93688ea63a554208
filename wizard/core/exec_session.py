import shutil
import sys
from typing import IO

from wizard.core.exec_types import ExecConfig
from wizard.errors.engine import EngineError
from wizard.errors.exec import ExecError
from wizard.helpers.terminal import StdinForwarder
from wizard.helpers.terminal import is_terminal
from wizard.helpers.terminal import raw_terminal


async def resize_to_terminal(engine, exec_id: str):
    columns, lines = shutil.get_terminal_size()
    try:
        await engine.resize_exec(exec_id, height=lines, width=columns)
    except EngineError:
        # exec may already be finished
        pass


async def run_container_command(engine, container_id: str, config: ExecConfig,
                                stdin: IO = None, stdout: IO = None) -> None:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout.buffer
    interactive = config.attach_stdin and is_terminal(stdin)

    exec_id = await engine.create_exec(container_id, config)
    sock = await engine.start_exec(exec_id)
    if interactive:
        await resize_to_terminal(engine, exec_id)

    last_output = b''
    forwarder = StdinForwarder(sock, stdin) if interactive else None
    try:
        with raw_terminal(interactive, stdin):
            if forwarder is not None:
                forwarder.start()
            async for chunk in engine.read_exec_output(sock):
                last_output = chunk
                stdout.write(chunk)
                stdout.flush()
    finally:
        if forwarder is not None:
            forwarder.stop()
        sock.close()

    exit_code = (await engine.inspect_exec(exec_id)).get('ExitCode')
    if exit_code not in (None, 0):
        raise ExecError(config.command_args, exit_code, last_output)
