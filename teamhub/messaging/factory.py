from typing import Callable, Dict

from .enums import MessageAdapterType
from .base import MessageAdapter
from .memory import InMemoryMessageAdapter, LoggingMessageAdapter
from .sqs import SqsConnection


class MessageAdapterFactory:
    def __init__(self):
        self._builders: Dict[str, Callable[..., MessageAdapter]] = {}

    def register_adapter(self, key: MessageAdapterType, builder: Callable[..., MessageAdapter]):
        self._builders[key] = builder

    def get(self, config) -> MessageAdapter:
        """Build the adapter named by `config.message_adapter_type`."""
        key = config.message_adapter_type
        builder = self._builders.get(key)

        if not builder:
            raise ValueError(key)

        return builder(config)


adapter_factory = MessageAdapterFactory()

adapter_factory.register_adapter(
    key=MessageAdapterType.memory,
    builder=lambda config: InMemoryMessageAdapter(max_history=config.notification_history))
adapter_factory.register_adapter(
    key=MessageAdapterType.logging,
    builder=lambda config: LoggingMessageAdapter())
adapter_factory.register_adapter(
    key=MessageAdapterType.sqs,
    builder=lambda config: SqsConnection(
        aws_access_key_id=config.get_env_var('AWS_ACCESS_KEY_ID'),
        aws_access_key_secret=config.get_env_var('AWS_SECRET_ACCESS_KEY'),
        region_name=config.get_env_var('AWS_REGION')))
