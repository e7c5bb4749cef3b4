from app.models.standard import Standard
from app.schemas.standard import StandardCreate, StandardUpdate

from .expirable import ExpirableService


class StandardService(ExpirableService[Standard, StandardCreate, StandardUpdate]):
    display_name = "Padrão"

standard_service = StandardService(Standard)
