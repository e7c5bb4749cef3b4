from app.models.document import Document
from app.schemas.document import DocumentCreate, DocumentUpdate

from .expirable import ExpirableService


class DocumentService(ExpirableService[Document, DocumentCreate, DocumentUpdate]):
    """Documentos vencem na data da próxima revisão."""
    display_name = "Documento"
    expiration_field = "next_review_date"

document_service = DocumentService(Document)
