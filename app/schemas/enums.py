from enum import Enum

class ValidityStatus(str, Enum):
    """Status derivado da data de vencimento (certificados, padrões e documentos)."""
    VALIDO = "valido"
    PRESTES_VENCER = "prestes_vencer"
    VENCIDO = "vencido"
    # Sinais de qualidade de dados, nunca tratados como válidos
    SEM_VALIDADE = "sem_validade"
    DATA_INVALIDA = "data_invalida"

class UserRoleEnum(str, Enum):
    """Valores aceitos na coluna `role` da tabela `users`."""
    ADMIN = "admin"
    TECNICO = "tecnico"
    CLIENTE = "cliente"

class UserStatusEnum(str, Enum):
    """Valores aceitos na coluna `status` da tabela `users`."""
    ATIVO = "ativo"
    INATIVO = "inativo"

class RegistrationStatusEnum(str, Enum):
    """Status cadastral de clientes e fornecedores."""
    ATIVO = "ativo"
    INATIVO = "inativo"
