import vedro
from vedro import catched

from wizard.core.log_streams import multiplex
from wizard.errors.engine import EngineError


async def broken_stream():
    yield b'starting\n'
    raise EngineError('container connection lost')


async def healthy_stream():
    yield b'ok\n'


class Scenario(vedro.Scenario):
    subject = 'multiplexed output fails when a stream fails'

    async def given_streams(self):
        self.streams = {'broken': broken_stream(), 'healthy': healthy_stream()}
        self.received = []

    async def when_user_reads_multiplexed_output(self):
        with catched(Exception) as self.exception:
            async for item in multiplex(self.streams):
                self.received += [item]

    async def then_it_should_raise_stream_error(self):
        assert self.exception.type is EngineError

    async def and_chunks_before_failure_should_be_delivered(self):
        assert ('broken', b'starting\n') in self.received
        assert ('healthy', b'ok\n') in self.received
