import os


class Config:
    def __init__(self):
        self.compose_file_names: list[str] = os.environ.get(
            'WIZARD_COMPOSE_FILES', 'docker-compose.yaml:docker-compose.yml'
        ).split(':')
        self.dockerfile: str = os.environ.get('WIZARD_DOCKERFILE', 'Dockerfile')
        self.shell: str = os.environ.get('WIZARD_SHELL', 'bash')
        self.rails_image: str = os.environ.get('WIZARD_RAILS_IMAGE', 'ruby:3.1')
        self.phoenix_image: str = os.environ.get('WIZARD_PHOENIX_IMAGE', 'elixir:1.13-slim')
        self.scaffold_ready_attempts = int(os.environ.get('WIZARD_SCAFFOLD_READY_ATTEMPTS', 30))
        self.scaffold_ready_delay = int(os.environ.get('WIZARD_SCAFFOLD_READY_DELAY', 1))
        self.log_width: int | None = int(os.environ['WIZARD_LOG_WIDTH']) if os.environ.get('WIZARD_LOG_WIDTH') else None
