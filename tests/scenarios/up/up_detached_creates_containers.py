import vedro

from contexts.compose_service import compose_service
from contexts.project_dir import compose_file
from contexts.project_dir import project_dir
from helpers.fake_engine import FakeEngine
from schemas.engine import ContainerConfigSchema
from wizard.core.project import ProjectContext


class Scenario(vedro.Scenario):
    subject = 'up detached creates network and containers for every service'

    async def given_project(self):
        self.root = project_dir('shop')
        self.context = ProjectContext.from_path(self.root)

    async def given_compose_file(self):
        compose_file(self.root, """
version: '3'
services:
  shop:
    image: ruby:3.1
    command: bundle exec rails s
    ports:
      - '3000:3000'
    volumes:
      - .:/app
    environment:
      RAILS_ENV: development
  db:
    image: postgres:latest
""")

    async def given_engine_with_images(self):
        self.engine = FakeEngine(images=['ruby:3.1', 'postgres:latest'])

    async def when_user_starts_project_detached(self):
        self.started = await compose_service(self.root, self.engine).up(detached=True)

    async def then_it_should_start_services_in_declaration_order(self):
        assert self.started == [self.context.container_name('shop'), self.context.container_name('db')]

    async def and_it_should_create_project_network(self):
        assert self.engine.calls_of('create_network') == [('shop-default', 'bridge')]

    async def and_containers_should_be_running(self):
        assert self.engine.state_of(self.context.container_name('shop')) == 'running'
        assert self.engine.state_of(self.context.container_name('db')) == 'running'

    async def and_it_should_translate_service_declaration(self):
        name, image, config = self.engine.calls_of('create_container')[0]
        assert image == 'ruby:3.1'
        assert config == ContainerConfigSchema % {
            'network': 'shop-default',
            'aliases': ['shop-shop', 'shop'],
        }
        assert config['command'] == ['bundle', 'exec', 'rails', 's']
        assert config['environment'] == ['RAILS_ENV=development']
        assert config['port_bindings'] == {'3000/tcp': [('0.0.0.0', '3000')]}
        assert config['exposed_ports'] == [('3000', 'tcp')]
        assert config['mounts'][0]['Source'] == str(self.root)

    async def and_it_should_not_pull_present_images(self):
        assert self.engine.calls_of('pull_image') == []
