import os
import pytest
from unittest.mock import patch
from cloudtrail_streamer.config.loader import AppConfig
from cloudtrail_streamer.utils.exceptions import ConfigurationError

REQUIRED_ENV = {
    "CT_KINESIS_STREAM": "cloudtrail-stream",
    "CT_KINESIS_REGION": "us-west-2",
}


class TestAppConfig:
    """Test cases for AppConfig.load"""

    def test_load_defaults(self):
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            config = AppConfig.load()

        assert config.kinesis_stream == "cloudtrail-stream"
        assert config.kinesis_region == "us-west-2"
        assert config.batch_size == 500
        assert config.s3_role_arn == ""
        assert config.event_type == "S3"
        assert config.event_filters == ""
        assert config.debug_logging is False
        assert config.log_level == "INFO"
        assert config.partition_key_mode == "fixed"
        assert config.kinesis_endpoint_url is None
        assert config.s3_endpoint_url is None

    def test_load_all_settings(self):
        env = {
            **REQUIRED_ENV,
            "CT_KINESIS_BATCH_SIZE": "25",
            "CT_S3_ROLE_ARN": "arn:aws:iam::123456789012:role/reader",
            "CT_EVENT_TYPE": "SNS",
            "CT_EVENT_FILTERS": "s3:PutObject",
            "CT_DEBUG_LOGGING": "1",
            "CT_PARTITION_KEY_MODE": "hash",
            "CT_KINESIS_ENDPOINT_URL": "http://localhost:4566",
            "CT_S3_ENDPOINT_URL": "http://localhost:4566",
        }
        with patch.dict(os.environ, env, clear=True):
            config = AppConfig.load()

        assert config.batch_size == 25
        assert config.s3_role_arn == "arn:aws:iam::123456789012:role/reader"
        assert config.event_type == "SNS"
        assert config.event_filters == "s3:PutObject"
        assert config.debug_logging is True
        assert config.log_level == "DEBUG"
        assert config.partition_key_mode == "hash"
        assert config.kinesis_endpoint_url == "http://localhost:4566"

    def test_missing_stream_raises(self):
        with patch.dict(os.environ, {"CT_KINESIS_REGION": "us-west-2"}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                AppConfig.load()

        assert "CT_KINESIS_STREAM must be set" in str(exc_info.value)
        assert exc_info.value.kind == "config"

    def test_missing_region_raises(self):
        with patch.dict(os.environ, {"CT_KINESIS_STREAM": "s"}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                AppConfig.load()

        assert "CT_KINESIS_REGION must be set" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["0", "501", "-1"])
    def test_batch_size_out_of_range_raises(self, value):
        env = {**REQUIRED_ENV, "CT_KINESIS_BATCH_SIZE": value}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError):
                AppConfig.load()

    @pytest.mark.parametrize("value", ["1", "500"])
    def test_batch_size_bounds_accepted(self, value):
        env = {**REQUIRED_ENV, "CT_KINESIS_BATCH_SIZE": value}
        with patch.dict(os.environ, env, clear=True):
            assert AppConfig.load().batch_size == int(value)

    def test_batch_size_not_an_integer_raises(self):
        env = {**REQUIRED_ENV, "CT_KINESIS_BATCH_SIZE": "ten"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                AppConfig.load()

        assert isinstance(exc_info.value.cause, ValueError)

    def test_invalid_event_type_raises(self):
        env = {**REQUIRED_ENV, "CT_EVENT_TYPE": "SQS"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                AppConfig.load()

        assert "CT_EVENT_TYPE" in str(exc_info.value)

    def test_invalid_partition_key_mode_raises(self):
        env = {**REQUIRED_ENV, "CT_PARTITION_KEY_MODE": "random"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError):
                AppConfig.load()

    def test_debug_logging_off_for_other_values(self):
        env = {**REQUIRED_ENV, "CT_DEBUG_LOGGING": "0"}
        with patch.dict(os.environ, env, clear=True):
            assert AppConfig.load().debug_logging is False
