"""Stream CloudTrail log files from S3 into a Kinesis stream."""

__version__ = "0.1.0"
