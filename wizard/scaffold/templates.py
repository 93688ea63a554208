RAILS_DOCKERFILE = '''FROM {image}

WORKDIR /app
RUN groupadd -r {user} -g 1000
RUN useradd -u 1000 -g {user} {user} -m -d /home/{user}
{extra_packages}
USER {user}
RUN gem install bundler

COPY Gemfile* /app/

RUN bundle install

COPY . /app
CMD ["tail", "-f", "/dev/null"]'''

RAILS_COMPOSE = '''version: '3.6'
services:
  {name}:
      build:
          context: .
      volumes:
          - .:/app
      ports:
          - '3000:3000'
      env_file:
          - .env
      command: bash -c "rm -f tmp/pids/server.pid && bundle exec rails s -p 3000 -b '0.0.0.0'"'''

POSTGRES_SERVICE = '''
  db:
      image: postgres:latest
      volumes:
          - db-data:/var/lib/postgresql/data
      ports:
          - '5432:5432'
      environment:
          POSTGRES_USER: postgres
          POSTGRES_PASSWORD: postgres
volumes:
  db-data:'''

MYSQL_SERVICE = '''
  db:
      image: mysql:latest
      command:
          - --default-authentication-plugin=mysql_native_password
      environment:
          - MYSQL_ROOT_PASSWORD=root
          - MYSQL_DATABASE=app_development
      ports:
          - '3306:3306'
      volumes:
          - mysql:/var/lib/mysql
volumes:
  mysql:'''

PHOENIX_DOCKERFILE = '''FROM {image}

ENV MIX_HOME=/.mix
RUN mkdir /app
RUN apt-get update && apt-get install inotify-tools -y
RUN groupadd -r {user} -g 1000
RUN useradd -u 1000 -g {user} {user} -m -d /home/{user}
WORKDIR /app
COPY . .
RUN mix local.hex --force
RUN mix deps.get
RUN mix local.rebar --force
RUN mix do compile

CMD ["tail", "-f", "/dev/null"]'''

PHOENIX_COMPOSE = '''version: '3.6'
services:
  {name}:
      build:
          context: .
      volumes:
          - .:/app
      ports:
          - '4000:4000'
      env_file:
          - .env
      command: mix phx.server''' + POSTGRES_SERVICE

DATABASE_SERVICES = {
    'postgresql': POSTGRES_SERVICE,
    'mysql': MYSQL_SERVICE,
}


def rails_dockerfile(user: str, sqlite3: bool = False, image: str = 'ruby:3.1') -> str:
    extra_packages = 'RUN apt-get update && apt-get install -y sqlite3' if sqlite3 else ''
    return RAILS_DOCKERFILE.format(image=image, user=user, extra_packages=extra_packages)


def rails_compose_file(name: str, database: str | None = None) -> str:
    return RAILS_COMPOSE.format(name=name) + DATABASE_SERVICES.get(database, '')


def phoenix_dockerfile(user: str, image: str = 'elixir:1.13') -> str:
    return PHOENIX_DOCKERFILE.format(image=image, user=user)


def phoenix_compose_file(name: str) -> str:
    return PHOENIX_COMPOSE.format(name=name)
