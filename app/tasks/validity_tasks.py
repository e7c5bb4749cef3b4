import logging
from typing import Dict

from sqlalchemy.orm import Session

from app.worker import celery_app
from app.db.session import SessionLocal
from app.services.certificate import certificate_service
from app.services.document import document_service
from app.services.standard import standard_service

logger = logging.getLogger(__name__)


def recalculate_validity_status(db: Session) -> Dict[str, int]:
    """
    Regrava o status persistido de certificados, padrões e documentos.
    As leituras da API já recalculam; isto mantém o banco coerente para
    quem consulta as tabelas diretamente. NÃO faz commit.
    """
    return {
        "certificates": certificate_service.refresh_statuses(db),
        "standards": standard_service.refresh_statuses(db),
        "documents": document_service.refresh_statuses(db),
    }


@celery_app.task(name="tasks.recalculate_validity_status")
def task_recalculate_validity_status() -> Dict[str, int]:
    logger.info("Iniciando tarefa: recalcular status de validade")
    db: Session = SessionLocal()
    try:
        changed = recalculate_validity_status(db)
        db.commit()
        logger.info(f"Tarefa concluída: status recalculados {changed}")
        return changed
    except Exception as e:
        db.rollback()
        logger.error(f"Erro na tarefa recalculate_validity_status: {e}", exc_info=True)
        raise
    finally:
        db.close()
