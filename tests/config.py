import os

import vedro

from wizard.core.config import Config as WizardConfig


class Config(vedro.Config):
    ROOT_PATH = os.environ.get('PWD')


class TestWizardConfig(WizardConfig):
    def __init__(self):
        super().__init__()
        self.compose_file_names = ['docker-compose.yaml', 'docker-compose.yml']
        self.dockerfile = 'Dockerfile'
        self.shell = 'bash'
        self.scaffold_ready_attempts = 3
        self.scaffold_ready_delay = 0
        self.log_width = 80
