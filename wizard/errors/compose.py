from pathlib import Path

from wizard.errors import WizardError


class ComposeFileError(WizardError):
    pass


class ComposeFileNotFoundError(ComposeFileError):
    def __init__(self, root: Path, file_names: list[str]):
        self.root = root
        self.file_names = file_names
        super().__init__(
            f'No compose file found in {root}, expected one of: {", ".join(file_names)}.\n'
            f'Make sure to run this command from the root of the project.'
        )


class MissingServicesError(ComposeFileError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f'Compose file {path} must have services')


class UnsupportedComposeVersionError(ComposeFileError):
    def __init__(self, version: str):
        self.version = version
        super().__init__(f'Unsupported docker-compose version "{version}". Please use v3 or higher')


class UnsupportedCommandError(ComposeFileError):
    def __init__(self, service: str, command):
        self.service = service
        self.command = command
        super().__init__(
            f'Unsupported command for service {service}: {command!r}\n'
            f'command should be a shell string or a list of strings'
        )


class EnvFileError(ComposeFileError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f'Could not read env file {path}: {reason}')
