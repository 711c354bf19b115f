"""Kafka consumer for type-definition notifications.

Polls batches of raw messages, turns each value into a notification with
the injected deserializer, and commits offsets explicitly unless the
underlying consumer auto-commits.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from confluent_kafka import Consumer, TopicPartition

from ..config import KafkaSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

MessageDeserializer = Callable[[str], T]


@dataclass(frozen=True)
class NotificationMessage(Generic[T]):
    """A deserialized notification and its position in the topic."""

    message: T
    offset: int
    partition: int
    topic: str


class NotificationConsumer(Generic[T]):
    """Receives and acknowledges notifications from Kafka."""

    def __init__(
        self,
        deserializer: MessageDeserializer[T],
        consumer: Consumer,
        auto_commit_enabled: bool = False,
    ):
        """Initialize the consumer.

        Args:
            deserializer: Turns a message value into a notification.
            consumer: A subscribed confluent-kafka consumer.
            auto_commit_enabled: Whether Kafka commits offsets itself;
                commit() is then a no-op.
        """
        self._deserializer = deserializer
        self._consumer = consumer
        self._auto_commit_enabled = auto_commit_enabled

    @classmethod
    def from_settings(
        cls, settings: KafkaSettings, deserializer: MessageDeserializer[T]
    ) -> "NotificationConsumer[T]":
        """Create a consumer subscribed to the configured topic."""
        consumer = Consumer(
            {
                "bootstrap.servers": settings.bootstrap_servers,
                "group.id": settings.group_id,
                "enable.auto.commit": settings.auto_commit,
                "auto.offset.reset": "earliest",
            }
        )
        consumer.subscribe([settings.topic])
        return cls(deserializer, consumer, auto_commit_enabled=settings.auto_commit)

    def receive(self, timeout: float, max_messages: int = 500) -> list[NotificationMessage[T]]:
        """Poll one batch of notifications.

        Args:
            timeout: Seconds to wait for messages.
            max_messages: Upper bound on the batch size.

        Returns:
            The deserialized messages, in the order received.
        """
        messages: list[NotificationMessage[T]] = []

        records = self._consumer.consume(num_messages=max_messages, timeout=timeout)

        for record in records or []:
            error = record.error()
            if error is not None:
                logger.warning(
                    "Kafka error on %s[%s]: %s", record.topic(), record.partition(), error
                )
                continue

            logger.debug(
                "Received message topic=%s, partition=%s, offset=%s, key=%s, value=%s",
                record.topic(),
                record.partition(),
                record.offset(),
                record.key(),
                record.value(),
            )

            value = record.value()
            if isinstance(value, bytes):
                value = value.decode("utf-8")

            messages.append(
                NotificationMessage(
                    message=self._deserializer(value),
                    offset=record.offset(),
                    partition=record.partition(),
                    topic=record.topic(),
                )
            )

        return messages

    def commit(self, topic: str, partition: int, offset: int) -> None:
        """Commit an offset for one partition."""
        if self._auto_commit_enabled:
            return

        logger.debug("Committing offset %d on %s[%d]", offset, topic, partition)
        self._consumer.commit(
            offsets=[TopicPartition(topic, partition, offset)], asynchronous=False
        )

    def close(self) -> None:
        if self._consumer is not None:
            self._consumer.close()
