"""
Tests for the message adapter factory
"""
from unittest.mock import MagicMock, patch
import pytest

from teamhub.messaging import InMemoryMessageAdapter, LoggingMessageAdapter
from teamhub.messaging.enums import MessageAdapterType
from teamhub.messaging.factory import MessageAdapterFactory, adapter_factory


def _config(kind, history=10):
    config = MagicMock()
    config.message_adapter_type = kind
    config.notification_history = history
    return config


def test_memory_adapter_uses_history_setting():
    adapter = adapter_factory.get(_config(MessageAdapterType.memory, history=3))
    assert isinstance(adapter, InMemoryMessageAdapter)
    assert adapter.max_history == 3


def test_logging_adapter():
    assert isinstance(adapter_factory.get(_config(MessageAdapterType.logging)), LoggingMessageAdapter)


@patch('teamhub.messaging.sqs.boto3.resource')
def test_sqs_adapter_reads_aws_settings(mock_resource):
    config = _config(MessageAdapterType.sqs)
    config.get_env_var.side_effect = {
        'AWS_ACCESS_KEY_ID': 'key',
        'AWS_SECRET_ACCESS_KEY': 'secret',
        'AWS_REGION': 'us-east-1',
    }.get

    adapter_factory.get(config)

    mock_resource.assert_called_once_with('sqs', aws_access_key_id='key',
                                          aws_secret_access_key='secret', region_name='us-east-1')


def test_unregistered_type_raises():
    with pytest.raises(ValueError):
        MessageAdapterFactory().get(_config(MessageAdapterType.memory))
