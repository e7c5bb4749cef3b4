import logging
from celery import Celery
from celery.schedules import crontab

from app.core.config import settings
from app.core.logging_config import setup_logging

# O worker também registra logs no mesmo formato da API
setup_logging()
logger = logging.getLogger(__name__)
logger.info("Configurando Celery worker...")

celery_app = Celery(
    "worker",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["app.tasks.validity_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.TIMEZONE,
    enable_utc=True,
    beat_schedule={
        # Logo após a virada do dia no fuso do laboratório
        "recalculate-validity-status-daily": {
            "task": "tasks.recalculate_validity_status",
            "schedule": crontab(hour=0, minute=5),
        },
    },
)

logger.info(f"Celery worker configurado. Broker: {settings.CELERY_BROKER_URL}")

# celery -A app.worker worker --loglevel=info
# celery -A app.worker beat --loglevel=info
