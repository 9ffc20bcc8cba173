"""Textual integration for the paste queue."""

from .controller import QueueController, QueueUIHooks, connect_session

__all__ = ["QueueController", "QueueUIHooks", "connect_session"]
