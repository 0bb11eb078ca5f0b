from transcriber_common.logging import SERVICE_NAME, setup_logging

__all__ = ["setup_logging", "SERVICE_NAME"]
