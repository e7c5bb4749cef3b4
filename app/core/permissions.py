from enum import Enum
from typing import Dict, List, NamedTuple

# =================================================================
# Papéis e Status de Usuário
# =================================================================
# O papel 'admin' ignora a verificação de permissões.
# =================================================================

ADMIN_ROLE_NAME = "admin"
TECNICO_ROLE_NAME = "tecnico"
CLIENTE_ROLE_NAME = "cliente"

USER_STATUS_ATIVO = "ativo"
USER_STATUS_INATIVO = "inativo"


# =================================================================
# Catálogo de Permissões
# =================================================================
# Enumeração fechada e versionada. Toda verificação programática usa
# estes códigos; o catálogo no banco é sincronizado a partir daqui
# (ver permission_service.sync_catalog).
# =================================================================

CATALOG_VERSION = 1


class PermissionCode(str, Enum):
    # --- Usuários ---
    USERS_VIEW = "users.view"
    USERS_CREATE = "users.create"
    USERS_EDIT = "users.edit"
    USERS_DELETE = "users.delete"
    USERS_MANAGE_PERMISSIONS = "users.manage_permissions"

    # --- Clientes ---
    CLIENTS_VIEW = "clients.view"
    CLIENTS_CREATE = "clients.create"
    CLIENTS_EDIT = "clients.edit"
    CLIENTS_DELETE = "clients.delete"

    # --- Documentos ---
    DOCUMENTS_VIEW = "documents.view"
    DOCUMENTS_CREATE = "documents.create"
    DOCUMENTS_EDIT = "documents.edit"
    DOCUMENTS_DELETE = "documents.delete"
    DOCUMENTS_MANAGE_CATEGORIES = "documents.manage_categories"

    # --- Padrões ---
    STANDARDS_VIEW = "standards.view"
    STANDARDS_CREATE = "standards.create"
    STANDARDS_EDIT = "standards.edit"
    STANDARDS_DELETE = "standards.delete"
    STANDARDS_MANAGE_TYPES = "standards.manage_types"

    # --- Certificados ---
    CERTIFICATES_VIEW = "certificates.view"
    CERTIFICATES_CREATE = "certificates.create"
    CERTIFICATES_EDIT = "certificates.edit"
    CERTIFICATES_DELETE = "certificates.delete"

    # --- Fornecedores ---
    SUPPLIERS_VIEW = "suppliers.view"
    SUPPLIERS_CREATE = "suppliers.create"
    SUPPLIERS_EDIT = "suppliers.edit"
    SUPPLIERS_DELETE = "suppliers.delete"

    # --- Treinamentos ---
    TRAININGS_VIEW = "trainings.view"
    TRAININGS_CREATE = "trainings.create"
    TRAININGS_EDIT = "trainings.edit"
    TRAININGS_DELETE = "trainings.delete"

    # --- Agendamentos ---
    APPOINTMENTS_VIEW = "appointments.view"
    APPOINTMENTS_CREATE = "appointments.create"
    APPOINTMENTS_EDIT = "appointments.edit"
    APPOINTMENTS_DELETE = "appointments.delete"

    # --- Não Conformidades ---
    NON_CONFORMITIES_VIEW = "non_conformities.view"
    NON_CONFORMITIES_CREATE = "non_conformities.create"
    NON_CONFORMITIES_EDIT = "non_conformities.edit"
    NON_CONFORMITIES_DELETE = "non_conformities.delete"

    # --- Relatórios e Auditoria ---
    REPORTS_VIEW = "reports.view"
    REPORTS_GENERATE = "reports.generate"
    LOGS_VIEW = "logs.view"
    ACTIVITIES_VIEW = "activities.view"

    # --- Configurações ---
    SETTINGS_VIEW = "settings.view"
    SETTINGS_EDIT = "settings.edit"


class ModuleDefinition(NamedTuple):
    id: str
    name: str
    description: str


class PermissionDefinition(NamedTuple):
    code: PermissionCode
    name: str
    description: str
    module_id: str


MODULES: List[ModuleDefinition] = [
    ModuleDefinition("users", "Usuários", "Gestão de usuários e permissões"),
    ModuleDefinition("clients", "Clientes", "Cadastro de clientes"),
    ModuleDefinition("documents", "Documentos", "Documentos do sistema da qualidade"),
    ModuleDefinition("standards", "Padrões", "Padrões de medição do laboratório"),
    ModuleDefinition("certificates", "Certificados", "Certificados de calibração"),
    ModuleDefinition("suppliers", "Fornecedores", "Cadastro de fornecedores"),
    ModuleDefinition("trainings", "Treinamentos", "Treinamentos da equipe"),
    ModuleDefinition("appointments", "Agendamentos", "Agenda de calibrações"),
    ModuleDefinition("non_conformities", "Não Conformidades", "Registro de não conformidades"),
    ModuleDefinition("reports", "Relatórios", "Relatórios, logs e atividades"),
    ModuleDefinition("settings", "Configurações", "Configurações do sistema"),
]

# Nome e descrição exibidos por ação; o módulo vem do prefixo do código
_ACTIONS: Dict[str, tuple] = {
    "view": ("Visualizar", "Pode visualizar"),
    "create": ("Criar", "Pode criar"),
    "edit": ("Editar", "Pode editar"),
    "delete": ("Deletar", "Pode deletar"),
}

_SPECIAL: Dict[PermissionCode, tuple] = {
    PermissionCode.USERS_MANAGE_PERMISSIONS: ("Gerenciar Permissões", "Pode gerenciar permissões de usuários"),
    PermissionCode.DOCUMENTS_MANAGE_CATEGORIES: ("Gerenciar Categorias", "Pode gerenciar categorias de documentos"),
    PermissionCode.STANDARDS_MANAGE_TYPES: ("Gerenciar Tipos", "Pode gerenciar tipos de padrões"),
    PermissionCode.REPORTS_GENERATE: ("Gerar Relatórios", "Pode gerar relatórios"),
    PermissionCode.LOGS_VIEW: ("Visualizar Logs", "Pode visualizar logs de auditoria"),
    PermissionCode.ACTIVITIES_VIEW: ("Visualizar Atividades", "Pode visualizar histórico de atividades"),
}

# Códigos cujo prefixo não coincide com o id do módulo
_MODULE_OVERRIDES: Dict[PermissionCode, str] = {
    PermissionCode.LOGS_VIEW: "reports",
    PermissionCode.ACTIVITIES_VIEW: "reports",
}


def _build_definitions() -> List[PermissionDefinition]:
    modules = {m.id: m for m in MODULES}
    definitions = []
    for code in PermissionCode:
        prefix, action = code.value.split(".", 1)
        module_id = _MODULE_OVERRIDES.get(code, prefix)
        module = modules[module_id]
        if code in _SPECIAL:
            name, description = _SPECIAL[code]
        else:
            verb, sentence = _ACTIONS[action]
            name = f"{verb} {module.name}"
            description = f"{sentence} {module.name.lower()}"
        definitions.append(PermissionDefinition(code, name, description, module_id))
    return definitions


PERMISSIONS: List[PermissionDefinition] = _build_definitions()


def is_catalog_code(code: str) -> bool:
    """Indica se o código pertence à enumeração fechada."""
    return code in PermissionCode._value2member_map_
