"""Detection of times of day in chat messages and their conversion between timezones."""

from .message_handler import MessageHandler, build_default_extractors

__all__ = ["MessageHandler", "build_default_extractors"]
