from cloudtrail_streamer.config.loader import AppConfig, MAX_BATCH_SIZE

__all__ = ["AppConfig", "MAX_BATCH_SIZE"]
