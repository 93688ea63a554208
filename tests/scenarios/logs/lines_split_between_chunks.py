import vedro

from helpers.console import RecordingConsole
from helpers.fake_engine import FakeEngine
from wizard.core.log_streams import stream_logs


class Scenario(vedro.Scenario):
    subject = 'lines split between output chunks are printed whole'

    async def given_container_with_chunked_output(self):
        self.engine = FakeEngine()
        self.engine.add_container('shop-web')
        cafe = 'café\n'.encode()
        self.engine.logs['shop-web'] = [
            b'Listening on http://0.0.0',
            b'.0:3000\n',
            cafe[:4],
            cafe[4:],
            b'Exiting',
        ]
        self.console = RecordingConsole()

    async def when_user_streams_logs(self):
        await stream_logs(self.engine, ['shop-web'], self.console, columns=80)

    async def then_it_should_print_every_line_once(self):
        assert self.console.lines == [
            'shop-web | Listening on http://0.0.0.0:3000',
            'shop-web | café',
            'shop-web | Exiting',
        ]
