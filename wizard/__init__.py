from wizard.core.compose_data_types import ComposeDocument
from wizard.core.compose_data_types import ServiceDeclaration
from wizard.core.config import Config
from wizard.core.engine_interface import DockerEngineInterface
from wizard.core.exec_types import ExecConfig
from wizard.core.project import ProjectContext
from wizard.core.project import project_hash
from wizard.core.service import WizardComposeService
from wizard.errors import WizardError
from wizard.version import get_version

__version__ = get_version()
__all__ = (
    'WizardComposeService', 'DockerEngineInterface', 'ProjectContext', 'project_hash',
    'ComposeDocument', 'ServiceDeclaration', 'ExecConfig', 'Config', 'WizardError',
)
