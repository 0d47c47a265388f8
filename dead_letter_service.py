#!/usr/bin/env python3
"""
Dead-letter tooling for the job description ingestion queue.

Messages whose deliveries kept failing are moved by the dramatiq Retries
middleware into the queue's dead-letter set. This script lists them,
requeues them with a fresh retry budget, or purges them.

    python dead_letter_service.py list
    python dead_letter_service.py requeue [MESSAGE_ID ...]
    python dead_letter_service.py purge
"""

import argparse
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dramatiq import Message

from jobdesc_rag.config.settings import settings
from jobdesc_rag.core.background.common import dead_letter_key, dead_letter_messages_key
from jobdesc_rag.utils.logging import setup_logger

logger = logging.getLogger("dead_letter_service")


def _text(value) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


class DeadLetterService:
    def __init__(self, redis_client, broker, queue_name: str):
        self.redis_client = redis_client
        self.broker = broker
        self.queue_name = queue_name
        self.xq_key = dead_letter_key(queue_name)
        self.xq_messages_key = dead_letter_messages_key(queue_name)

    def list_messages(self) -> List[Dict[str, Any]]:
        entries = []
        for message_id, score in self.redis_client.zrange(self.xq_key, 0, -1, withscores=True):
            message_id = _text(message_id)
            data = self.redis_client.hget(self.xq_messages_key, message_id)
            if data is None:
                logger.warning(f"Dead-lettered message {message_id} has no stored body")
                continue

            message = Message.decode(data)
            entries.append({
                "message_id": message_id,
                "actor": message.actor_name,
                "retries": message.options.get("retries", 0),
                "dead_lettered_at": datetime.fromtimestamp(score / 1000, tz=timezone.utc).isoformat(),
                "traceback": message.options.get("traceback"),
            })
        return entries

    def requeue(self, message_ids: Optional[List[str]] = None) -> int:
        """
        Put dead-lettered messages back on the queue with their retry count reset.

        Requeues every dead-lettered message when ``message_ids`` is empty.
        """
        if not message_ids:
            message_ids = [_text(m) for m in self.redis_client.zrange(self.xq_key, 0, -1)]

        requeued = 0
        for message_id in message_ids:
            data = self.redis_client.hget(self.xq_messages_key, message_id)
            if data is None:
                logger.warning(f"Message {message_id} is not in the dead-letter queue")
                continue

            message = Message.decode(data)
            options = {k: v for k, v in message.options.items() if k != "traceback"}
            options["retries"] = 0

            # Message.copy merges options and would keep the traceback
            self.broker.enqueue(Message(
                queue_name=message.queue_name,
                actor_name=message.actor_name,
                args=message.args,
                kwargs=message.kwargs,
                options=options,
                message_id=message.message_id,
                message_timestamp=message.message_timestamp,
            ))
            self.redis_client.zrem(self.xq_key, message_id)
            self.redis_client.hdel(self.xq_messages_key, message_id)
            requeued += 1
            logger.info(f"Requeued message {message_id}")

        logger.info(f"Requeued {requeued} of {len(message_ids)} dead-lettered messages")
        return requeued

    def purge(self) -> int:
        count = self.redis_client.zcard(self.xq_key)
        self.redis_client.delete(self.xq_key, self.xq_messages_key)
        logger.info(f"Purged {count} dead-lettered messages from {self.queue_name}")
        return count


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Dead-letter tooling for the ingestion queue")
    parser.add_argument("--queue", default=settings.ingestion_queue_name, help="Queue name")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="List dead-lettered messages")
    requeue_parser = subparsers.add_parser("requeue", help="Requeue dead-lettered messages")
    requeue_parser.add_argument("message_ids", nargs="*", help="Message ids (default: all)")
    subparsers.add_parser("purge", help="Delete all dead-lettered messages")
    args = parser.parse_args()

    setup_logger("dead_letter_service", level=settings.log_level)

    from jobdesc_rag.core.background.common import broker, get_redis_client

    broker.declare_queue(args.queue)
    service = DeadLetterService(get_redis_client(), broker, args.queue)

    if args.command == "list":
        entries = service.list_messages()
        for entry in entries:
            logger.info(
                f"{entry['message_id']} actor={entry['actor']} retries={entry['retries']} "
                f"dead_lettered_at={entry['dead_lettered_at']}"
            )
        logger.info(f"{len(entries)} dead-lettered message(s) in {args.queue}")
    elif args.command == "requeue":
        service.requeue(args.message_ids)
    elif args.command == "purge":
        service.purge()
