import vedro

from contexts.compose_service import compose_service
from contexts.compose_service import project_containers_started
from contexts.project_dir import compose_file
from contexts.project_dir import project_dir
from helpers.console import RecordingConsole
from helpers.fake_engine import FakeEngine
from wizard.core.project import ProjectContext


class Scenario(vedro.Scenario):
    subject = 'status lists containers of declared services'

    async def given_project(self):
        self.root = project_dir('shop')
        self.context = ProjectContext.from_path(self.root)
        compose_file(self.root, """
version: '3'
services:
  shop:
    image: ruby:3.1
  db:
    image: postgres:latest
  worker:
    image: ruby:3.1
""")

    async def given_partially_started_project(self):
        self.engine = FakeEngine()
        self.shop, self.db = project_containers_started(self.root, self.engine, {'shop': 'running', 'db': 'exited'})
        self.worker = self.context.container_name('worker')
        self.console = RecordingConsole()

    async def when_user_requests_status(self):
        self.containers = await compose_service(self.root, self.engine, self.console).status()

    async def then_it_should_return_existing_containers(self):
        assert [container.name for container in self.containers] == [self.shop, self.db]

    async def and_it_should_show_container_states(self):
        assert f'[Wizard]::Status - {self.shop} [running] - Image: busybox:latest' in self.console.lines
        assert f'[Wizard]::Status - {self.db} [exited] - Image: busybox:latest' in self.console.lines

    async def and_it_should_report_missing_service_as_stopped(self):
        assert f'[Wizard]::Status - {self.worker} [stopped]' in self.console.lines

    async def and_it_should_warn_about_missing_services(self):
        assert '[Wizard]::Warning - This project defines services currently not running.' in self.console.lines
