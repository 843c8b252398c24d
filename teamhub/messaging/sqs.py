"""Publishes change notifications to AWS SQS and reads them back."""
import json
import logging
import uuid
import boto3
from dotenv import dotenv_values

from . import MessageAdapter

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 10  # SQS limit for receive_messages and delete_messages


class SqsConnection(MessageAdapter):
    """Sends hierarchy notifications to SQS queues and drains them in batches."""

    def __init__(self, aws_access_key_id: str = None,
                 aws_access_key_secret: str = None,
                 region_name: str = None,
                 consume_config_file_path: str = None):
        """Initializes a new SQS connection.

        Args:
            aws_access_key_id (str): The AWS access key ID.
            aws_access_key_secret (str): The AWS access key secret.
            region_name (str): The AWS region name.
            consume_config_file_path (str): Optional .env file re-read while consuming;
                `EXIT_WHEN_FINISHED=1` there stops once the queue is empty.
        """
        super().__init__()
        self._aws_access_key_id = aws_access_key_id
        self._aws_access_key_secret = aws_access_key_secret
        self._region_name = region_name
        self._consume_config_file_path = consume_config_file_path
        self._sqs = boto3.resource('sqs',
                                   aws_access_key_id=self._aws_access_key_id,
                                   aws_secret_access_key=self._aws_access_key_secret,
                                   region_name=self._region_name)
        self._queue_map = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        pass

    def _queue(self, queue_name: str):
        queue = self._queue_map.get(queue_name)
        if queue is None:
            logger.info("Opening SQS queue %s", queue_name)
            queue = self._queue_map[queue_name] = self._sqs.create_queue(QueueName=queue_name)
        return queue

    def _should_exit_when_empty(self, exit_when_empty) -> bool:
        if exit_when_empty is not None:
            return exit_when_empty
        if self._consume_config_file_path is None:
            return False
        return dotenv_values(self._consume_config_file_path).get('EXIT_WHEN_FINISHED') == '1'

    @staticmethod
    def _attributes(message: dict) -> dict:
        """Expose event and variant as message attributes so subscribers can filter on them."""
        return {
            name: {'DataType': 'String', 'StringValue': str(message[name])}
            for name in ('event', 'variant') if message.get(name)
        }

    def send_message(self, queue_name: str, message: dict):
        """Sends one notification to `queue_name` as a JSON body.

        Args:
            queue_name (str): The name of the queue to send the message to.
            message (dict): The notification to send.
        """
        self._queue(queue_name).send_message(
            MessageBody=json.dumps(message),
            MessageAttributes=self._attributes(message)
        )

    def _handle_batch(self, responses, callback_function):
        entries = []
        for response in responses:
            try:
                body = json.loads(response.body)
                if callback_function is not None:
                    callback_function(body)
            except Exception:  # pylint: disable=W0718
                logger.exception("Error processing notification %s", getattr(response, 'message_id', None))
            entries.append({'Id': uuid.uuid4().hex, 'ReceiptHandle': response.receipt_handle})
        return entries

    def consume_messages(self, queue_name: str, callback_function: callable = None,
                         exit_when_empty: bool = None, wait_seconds: int = 20):
        """Drains notifications from `queue_name`, up to ten per receive call.

        A message whose callback fails is logged and still deleted, so one bad
        notification cannot block the queue.

        Args:
            queue_name (str): The name of the queue to consume messages from.
            callback_function (callable): The function to call with each decoded notification.
            exit_when_empty (bool): Stop at the first empty receive. Defaults to the
                `EXIT_WHEN_FINISHED` flag of the consume config file; otherwise polls forever.
            wait_seconds (int): Long-poll wait per receive call.
        """
        queue = self._queue(queue_name)

        while True:
            responses = queue.receive_messages(
                AttributeNames=['All'],
                MessageAttributeNames=['All'],
                MaxNumberOfMessages=MAX_BATCH_SIZE,
                WaitTimeSeconds=wait_seconds
            )
            if not responses:
                if self._should_exit_when_empty(exit_when_empty):
                    logger.info("Queue %s is empty, stopping.", queue_name)
                    return
                logger.debug("Queue %s is empty, polling again.", queue_name)
                continue

            logger.info("Received %d notification(s) from %s", len(responses), queue_name)
            queue.delete_messages(Entries=self._handle_batch(responses, callback_function))
