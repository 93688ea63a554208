from rich.console import Console
from rich.text import Text

from wizard.output.console import CONSOLE
from wizard.output.styles import Style

DONE_MARK = '✔'
FAILED_MARK = '✘'


def done_text(subject: str, outcome: str) -> Text:
    return (Text(f'{DONE_MARK} ', style=Style.good)
            .append(Text(subject, style=Style.regular))
            .append(Text(' ['))
            .append(Text(outcome, style=Style.good))
            .append(Text(']')))


def failed_text(subject: str, outcome: str = 'failed') -> Text:
    return (Text(f'{FAILED_MARK} ', style=Style.bad)
            .append(Text(subject, style=Style.regular))
            .append(Text(' ['))
            .append(Text(outcome, style=Style.bad))
            .append(Text(']')))


def wizard_status_text(message: str | Text, prefix_style: str = Style.info) -> Text:
    return Text('[', style=Style.regular) \
        .append(Text('Wizard', style=prefix_style)) \
        .append(Text(']::Status - ')) \
        .append(message if isinstance(message, Text) else Text(message))


class Spinner:
    """
    Console spinner which ends with a single "✔ subject [outcome]" or
    "✘ subject [failed]" line.
    """

    def __init__(self, message: str, console: Console = CONSOLE):
        self._console = console
        self._status = console.status(message)
        self._active = False

    def __enter__(self) -> 'Spinner':
        self._status.start()
        self._active = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._stop()

    def _stop(self):
        if self._active:
            self._status.stop()
            self._active = False

    def println(self, text: str | Text):
        self._console.print(text)

    def finish(self, subject: str, outcome: str):
        self._stop()
        self._console.print(done_text(subject, outcome))

    def abandon(self, subject: str, outcome: str = 'failed'):
        self._stop()
        self._console.print(failed_text(subject, outcome))
