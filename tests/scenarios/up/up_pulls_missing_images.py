import vedro

from contexts.compose_service import compose_service
from contexts.project_dir import compose_file
from contexts.project_dir import project_dir
from helpers.console import RecordingConsole
from helpers.fake_engine import FakeEngine


class Scenario(vedro.Scenario):
    subject = 'up pulls images missing locally'

    async def given_project(self):
        self.root = project_dir('shop')

    async def given_compose_file(self):
        compose_file(self.root, """
version: '3'
services:
  cache:
    image: redis
  db:
    image: postgres:15
""")

    async def given_engine_with_one_image(self):
        self.engine = FakeEngine(images=['redis:latest'])
        self.console = RecordingConsole()

    async def when_user_starts_project_detached(self):
        await compose_service(self.root, self.engine, self.console).up(detached=True)

    async def then_it_should_pull_only_missing_image(self):
        assert self.engine.calls_of('pull_image') == [('postgres:15',)]

    async def and_it_should_report_pulled_image(self):
        assert '✔ postgres:15 [pulled]' in self.console.lines
