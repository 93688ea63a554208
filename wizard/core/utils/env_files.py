from pathlib import Path

from wizard.errors.compose import EnvFileError


def parse_env_lines(content: str) -> list[str]:
    env = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export '):]
        key, sep, value = line.partition('=')
        if sep:
            env += [f'{key.strip()}={value}']
    return env


def read_env_file(path: Path) -> list[str]:
    try:
        content = path.read_text()
    except OSError as e:
        raise EnvFileError(path, e.strerror or str(e)) from None
    return parse_env_lines(content)
