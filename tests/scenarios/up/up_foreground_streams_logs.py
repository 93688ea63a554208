import vedro

from contexts.compose_service import compose_service
from contexts.project_dir import compose_file
from contexts.project_dir import project_dir
from helpers.console import RecordingConsole
from helpers.fake_engine import FakeEngine
from wizard.core.project import ProjectContext


class Scenario(vedro.Scenario):
    subject = 'up in foreground streams started containers output'

    async def given_project(self):
        self.root = project_dir('shop')
        self.context = ProjectContext.from_path(self.root)
        self.shop = self.context.container_name('shop')
        self.db = self.context.container_name('db')

    async def given_compose_file(self):
        compose_file(self.root, """
version: '3'
services:
  shop:
    image: ruby:3.1
  db:
    image: postgres:latest
""")

    async def given_engine_with_container_output(self):
        self.engine = FakeEngine(images=['ruby:3.1', 'postgres:latest'])
        self.engine.logs[self.shop] = [b'Listening on 0.0.0.0:3000\r\n']
        self.engine.logs[self.db] = [b'database system is ready\n\n']
        self.console = RecordingConsole()

    async def when_user_starts_project_in_foreground(self):
        await compose_service(self.root, self.engine, self.console).up(detached=False)

    async def then_it_should_attach_to_started_containers(self):
        assert sorted(self.engine.calls_of('attach_output')) == sorted([(self.shop,), (self.db,)])

    async def and_it_should_label_lines_with_padded_container_name(self):
        width = max(len(self.shop), len(self.db))
        assert f'{self.shop:<{width}} | Listening on 0.0.0.0:3000' in self.console.lines
        assert f'{self.db:<{width}} | database system is ready' in self.console.lines
