# classroom_qa/workers/queue.py
import logging
from typing import Any, Callable

from redis import Redis
from redis.exceptions import RedisError
from rq import Queue

from classroom_qa.core.config import settings

logger = logging.getLogger(__name__)

MAINTENANCE_QUEUE_NAME = "maintenance"

_redis_conn: Redis | None = None


def get_redis_connection() -> Redis:
    global _redis_conn
    if _redis_conn is None:
        _redis_conn = Redis.from_url(settings.REDIS_URL)
    return _redis_conn


def get_queue(name: str = MAINTENANCE_QUEUE_NAME) -> Queue:
    return Queue(name, connection=get_redis_connection())


def enqueue_job(
    func: Callable[..., Any],
    *args: Any,
    queue_name: str = MAINTENANCE_QUEUE_NAME,
    **kwargs: Any,
) -> str:
    q = get_queue(queue_name)
    job = q.enqueue(func, *args, **kwargs)
    return job.id


def enqueue_upload_sweep() -> str:
    from classroom_qa.workers.tasks import sweep_uploads_task

    return enqueue_job(sweep_uploads_task)


def enqueue_upload_delete(filenames: list[str]) -> str:
    from classroom_qa.workers.tasks import delete_uploads_task

    return enqueue_job(delete_uploads_task, list(filenames))


def schedule_cleanup_after_delete(filenames: list[str]) -> str | None:
    """
    Queue deletion of ``filenames`` once the rows pointing at them are gone.

    Only active with CLEANUP_ON_DELETE; a Redis outage is logged and does not
    fail the delete that triggered it. Files left behind are picked up by the
    periodic sweep.
    """
    if not settings.CLEANUP_ON_DELETE or not filenames:
        return None
    try:
        return enqueue_upload_delete(filenames)
    except RedisError as e:
        logger.warning(f"Could not queue deletion of {len(filenames)} upload(s): {e}")
        return None
