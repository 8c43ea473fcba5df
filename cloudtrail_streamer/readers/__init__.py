from cloudtrail_streamer.readers.reader import RecordReader

__all__ = ["RecordReader"]
