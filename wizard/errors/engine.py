from wizard.errors import WizardError


class EngineError(WizardError):
    pass


class ContainerNotFoundError(EngineError):
    def __init__(self, container: str):
        self.container = container
        super().__init__(f'Container {container} not found or not running')


class ImageBuildError(EngineError):
    def __init__(self, image: str, reason: str):
        self.image = image
        super().__init__(f"Can't build image {image}: {reason}")


class NothingStartedError(EngineError):
    def __init__(self):
        super().__init__('Something went wrong, no containers were started')
