"""
Módulo de Serviços

Regras de negócio e acesso a dados. Cada módulo expõe uma instância de
serviço; nenhum serviço faz commit, isso fica com a rota.
"""

from .user import user_service
from .permission import permission_service
from .authorization import authorization_checker
from .client import client_service
from .supplier import supplier_service
from .certificate import certificate_service
from .standard import standard_service
from .document import document_service

__all__ = [
    "user_service",
    "permission_service",
    "authorization_checker",
    "client_service",
    "supplier_service",
    "certificate_service",
    "standard_service",
    "document_service",
]
