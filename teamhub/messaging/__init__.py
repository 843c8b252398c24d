"""Module for messaging"""
from .base import MessageAdapter
from .memory import InMemoryMessageAdapter, LoggingMessageAdapter
from .sqs import SqsConnection
from .enums import MessageAdapterType, Event, Variant
from .factory import adapter_factory
from . import notifications
