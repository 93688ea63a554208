import vedro

from contexts.compose_service import compose_service
from contexts.compose_service import project_containers_started
from contexts.project_dir import project_dir
from helpers.console import RecordingConsole
from helpers.fake_engine import FakeEngine
from wizard.helpers.jobs_result import JobResult
from wizard.helpers.jobs_result import all_good


class Scenario(vedro.Scenario):
    subject = 'down reports failing container and continues'

    async def given_project(self):
        self.root = project_dir('shop')

    async def given_started_project(self):
        self.engine = FakeEngine()
        self.shop, self.db = project_containers_started(self.root, self.engine, {'shop': 'running', 'db': 'running'})
        self.engine.fail('remove_container', self.shop, 'removal of container is already in progress')
        self.console = RecordingConsole()

    async def when_user_stops_project(self):
        self.results = await compose_service(self.root, self.engine, self.console).down()

    async def then_failing_container_should_be_reported(self):
        assert self.results[self.shop] == JobResult.BAD
        assert not all_good(self.results)
        assert f'✘ {self.shop} [failed]' in self.console.lines

    async def and_other_container_should_be_removed(self):
        assert self.results[self.db] == JobResult.GOOD
        assert self.db not in self.engine.containers
        assert f'✔ {self.db} [stopped]' in self.console.lines
