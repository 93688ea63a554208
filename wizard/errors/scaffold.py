from wizard.errors import WizardError


class ScaffoldError(WizardError):
    pass


class ScaffoldFileError(ScaffoldError):
    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        super().__init__(f'Could not write to file: {file_name} - {reason}')


class ScaffoldContainerNotReadyError(ScaffoldError):
    def __init__(self, container: str):
        self.container = container
        super().__init__(f'Scaffold container {container} is not running')
