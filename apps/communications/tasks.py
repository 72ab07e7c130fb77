# communications/tasks.py
import logging

from celery import shared_task

from . import services

logger = logging.getLogger(__name__)


@shared_task
def cleanup_expired_messages():
    """Periodic purge of expired chat messages (scheduled by celery beat)."""
    deleted = services.cleanup_expired_messages()
    logger.info("Cleaned up %s expired messages", deleted)
    return deleted


@shared_task
def delete_uploaded_file(name):
    """Remove a temporary chat upload once its lifetime is over."""
    return services.delete_stored_file(name)
