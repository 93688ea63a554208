from wizard.errors import WizardError


class ExecError(WizardError):
    def __init__(self, command: list[str], exit_code: int | None, output: bytes):
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(output.decode('utf-8', errors='replace').strip()
                         or f'{" ".join(command)} exited with code {exit_code}')
