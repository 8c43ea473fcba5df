from cloudtrail_streamer.streams.base import Stream, StreamEntry
from cloudtrail_streamer.streams.factory import StreamFactory
from cloudtrail_streamer.streams.kinesis import Kinesis

# Register the Kinesis stream with the factory
StreamFactory.register_stream('kinesis', Kinesis)

__all__ = [
    'Stream',
    'StreamEntry',
    'StreamFactory',
    'Kinesis'
]
