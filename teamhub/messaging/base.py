"""
The interface every notification channel implements.
"""
from abc import abstractmethod


class MessageAdapter:
    """
    A channel that carries change notifications from the store to whoever shows them.

    Adapters are used as context managers around each send so that channels
    holding a connection can open and release it.
    """

    def __init__(self):
        pass

    @abstractmethod
    def send_message(self, queue_name: str, message: dict):
        """
        Publishes one notification.

        Args:
            queue_name (str): The queue (or topic) the notification belongs to.
            message (dict): The notification, as built by `teamhub.messaging.notifications`.
        """

    @abstractmethod
    def consume_messages(self, queue_name: str, callback_function: callable = None):
        """
        Reads notifications back, calling `callback_function` with each one.

        Args:
            queue_name (str): The queue to read from.
            callback_function (callable): Called once per notification, oldest first.
        """

    @abstractmethod
    def __enter__(self):
        """Opens whatever the channel needs before sending."""

    @abstractmethod
    def __exit__(self, exc_type, exc_value, traceback):
        """Releases what __enter__ opened."""
