# Importa as tarefas para que o Celery as descubra
from .validity_tasks import task_recalculate_validity_status

__all__ = [
    "task_recalculate_validity_status",
]
