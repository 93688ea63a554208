from typing import NamedTuple


class ExecConfig(NamedTuple):
    command_args: list[str]
    user: str | None = None
    work_dir: str | None = None
    attach_stdin: bool = False
    env: list[str] | None = None

    def command_line(self) -> str:
        return ' '.join(self.command_args)
