"""In-process message adapters: a bounded history for a UI and a logging sink."""
import logging
from collections import defaultdict, deque

from . import MessageAdapter

logger = logging.getLogger(__name__)


class InMemoryMessageAdapter(MessageAdapter):
    """Keeps the most recent messages per queue until a consumer drains them."""

    def __init__(self, max_history: int = 50):
        super().__init__()
        self.max_history = max_history
        self._queues = defaultdict(lambda: deque(maxlen=self.max_history))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        pass

    def send_message(self, queue_name: str, message: dict):
        self._queues[queue_name].append(message)

    def pending(self, queue_name: str) -> list:
        """Return queued messages without removing them."""
        return list(self._queues.get(queue_name, ()))

    def consume_messages(self, queue_name: str, callback_function: callable = None):
        """
        Drain every message queued so far, oldest first.

        Returns:
            list: The drained messages.
        """
        queue = self._queues.get(queue_name)
        drained = []
        while queue:
            message = queue.popleft()
            drained.append(message)
            if callback_function is not None:
                callback_function(message)
        return drained


class LoggingMessageAdapter(MessageAdapter):
    """Writes every message to the log and keeps nothing."""

    def __init__(self, level: int = logging.INFO):
        super().__init__()
        self.level = level

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        pass

    def send_message(self, queue_name: str, message: dict):
        logger.log(self.level, "[%s] %s: %s", queue_name, message.get('title'), message.get('description'))

    def consume_messages(self, queue_name: str, callback_function: callable = None):
        logger.debug("Nothing to consume from %s, messages are only logged.", queue_name)
        return []
