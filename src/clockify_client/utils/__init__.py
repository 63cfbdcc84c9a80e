"""Utility modules for the Clockify client."""

from clockify_client.utils.logging import disable_log, enable_log, get_logger, setup_logging

__all__ = ["disable_log", "enable_log", "get_logger", "setup_logging"]
