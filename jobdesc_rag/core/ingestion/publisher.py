import logging

import dramatiq

from jobdesc_rag.models.job_models import JobDescriptionMessage, JobDescriptionSubmission

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"


class QueuePublisher:
    """
    Hands validated submissions to the ingestion queue.

    The envelope id doubles as the transport message id. Broker errors are
    not retried here; they propagate to the caller.
    """

    def __init__(self, actor: dramatiq.Actor):
        self.actor = actor

    @property
    def queue_name(self) -> str:
        return self.actor.queue_name

    def publish(self, submission: JobDescriptionSubmission) -> str:
        envelope = JobDescriptionMessage.create(submission)
        self.publish_envelope(envelope)
        return envelope.message_id

    def publish_envelope(self, envelope: JobDescriptionMessage) -> dramatiq.Message:
        message = self.actor.message_with_options(
            args=(envelope.to_json(),),
            content_type=CONTENT_TYPE,
        ).copy(message_id=envelope.message_id)

        enqueued = self.actor.broker.enqueue(message)
        logger.info(f"Job description message {envelope.message_id} sent to queue {self.queue_name}")
        return enqueued
