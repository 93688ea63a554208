import asyncio
from enum import Enum
from typing import Coroutine
from typing import Optional

import typer
from click.shell_completion import get_completion_class
from rich.text import Text

from wizard.core.project import ProjectContext
from wizard.core.service import WizardComposeService
from wizard.errors import WizardError
from wizard.errors.exec import ExecError
from wizard.output.console import CONSOLE
from wizard.output.styles import Style
from wizard.scaffold.phoenix import phoenix_cmd
from wizard.scaffold.phoenix import phoenix_new
from wizard.scaffold.rails import Database
from wizard.scaffold.rails import rails_cmd
from wizard.scaffold.rails import rails_new
from wizard.scaffold.scaffold_runner import error_text
from wizard.version import get_version

PROG_NAME = 'wizard'
COMPLETE_VAR = '_WIZARD_COMPLETE'
PASSTHROUGH_SETTINGS = {'allow_extra_args': True, 'ignore_unknown_options': True}

app = typer.Typer(name=PROG_NAME, add_completion=False, help='Dockerized Rails/Phoenix projects and compose workflow')
new_app = typer.Typer(help='Generate a new dockerized app')
app.add_typer(new_app, name='new')


class Shell(str, Enum):
    bash = 'bash'
    zsh = 'zsh'
    fish = 'fish'
    powershell = 'powershell'


def run_wizard(coroutine: Coroutine):
    try:
        return asyncio.run(coroutine)
    except ExecError as e:
        CONSOLE.print(error_text(
            Text('failed to execute command: ').append(Text(' '.join(e.command), style=Style.label))
        ))
        CONSOLE.print(error_text(Text('Error from command: ').append(Text(e.message, style=Style.bad))))
        raise typer.Exit(code=1)
    except WizardError as e:
        CONSOLE.print(
            Text('[').append(Text('Wizard', style=Style.bad)).append(']::Error - ')
            .append(Text(e.message, style=Style.bad))
        )
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        raise typer.Exit(code=130)


def compose_service() -> WizardComposeService:
    return WizardComposeService(ProjectContext.current())


def completion_script(shell: Shell) -> str:
    completion_class = get_completion_class(shell.value)
    if completion_class is None:
        raise WizardError(f'Completion for {shell.value} is not supported')
    command = typer.main.get_command(app)
    return completion_class(command, {}, PROG_NAME, COMPLETE_VAR).source()


def version_callback(value: bool):
    if value:
        CONSOLE.print(f'wizard version: {get_version()}')
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, '--version', '-v', callback=version_callback, is_eager=True, help='Show version and exit'
    ),
    status: bool = typer.Option(False, '--status', help='Docker status for the current project'),
    generate_completion: Optional[Shell] = typer.Option(
        None, '--generate-completion', case_sensitive=False, help='Print shell completion script'
    ),
):
    if status:
        run_wizard(compose_service().status())

    if generate_completion is not None:
        try:
            typer.echo(completion_script(generate_completion))
        except WizardError as e:
            CONSOLE.print(Text(e.message, style=Style.bad))
            raise typer.Exit(code=1)

    if ctx.invoked_subcommand is None and not status and generate_completion is None:
        typer.echo(ctx.get_help())


@app.command(help='Start the docker compose project')
def start(detached: bool = typer.Option(False, '--detached', '-d', help='start the project in detached mode')):
    run_wizard(compose_service().up(detached=detached))


@app.command(help='Stop the docker compose project')
def stop():
    run_wizard(compose_service().down())


@app.command(help='Restart the docker compose project containers')
def restart():
    run_wizard(compose_service().restart())


@app.command(help='Build the images in the docker compose project')
def build(force: bool = typer.Option(False, '--force', '-f', help='remove previously built images first')):
    run_wizard(compose_service().build(force=force))


@app.command(help='Run a shell inside a container. Without --container-name the main project container is used')
def shell(
    container_name: Optional[str] = typer.Option(
        None, '--container-name', '-c', help='run the shell in the specified container'
    ),
    user: Optional[str] = typer.Option(None, '--user', '-u', help='run the shell as the specified user'),
):
    run_wizard(compose_service().shell(container_name=container_name, user=user))


@app.command(context_settings=PASSTHROUGH_SETTINGS, help='Execute a rails command in the main project container')
def rails(ctx: typer.Context):
    run_wizard(rails_cmd(compose_service(), list(ctx.args)))


@app.command(context_settings=PASSTHROUGH_SETTINGS, help='Execute a phoenix command in the main project container')
def phoenix(ctx: typer.Context):
    run_wizard(phoenix_cmd(compose_service(), list(ctx.args)))


@new_app.command('rails', help='Generate a new dockerized rails app')
def new_rails(
    name: str = typer.Argument(..., help='The name of the new rails app'),
    api: bool = typer.Option(False, '--api', help='Generate an api only app and skip view generation'),
    database: Optional[Database] = typer.Option(None, '--database', '-d', help='Which database to use'),
):
    run_wizard(rails_new(name, api=api, database=database))


@new_app.command('phoenix', help='Generate a new dockerized phoenix app')
def new_phoenix(name: str = typer.Argument(..., help='The name of the new phoenix app')):
    run_wizard(phoenix_new(name))
