import logging
from typing import Any, Dict, List, Optional, Set
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.core.permissions import MODULES, PERMISSIONS, PermissionCode
from app.models.permission import Permission
from app.models.permission_module import PermissionModule
from app.models.user import User
from app.models.user_permission import UserPermission

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class PermissionService:
    """
    Registro de permissões: catálogo (módulos e permissões) e concessões por usuário.

    Nenhum método faz commit. As concessões são lidas direto do banco a cada
    chamada, sem cache em memória.
    """

    # --- Catálogo ---

    def get(self, db: Session, id: UUID) -> Optional[Permission]:
        return db.get(Permission, id)

    def get_by_code(self, db: Session, *, code: str) -> Optional[Permission]:
        statement = select(Permission).where(Permission.code == code)
        return db.execute(statement).scalar_one_or_none()

    def is_known_code(self, db: Session, *, code: str) -> bool:
        statement = select(Permission.id).where(Permission.code == code)
        return db.execute(statement).first() is not None

    def list_catalog(self, db: Session) -> List[Permission]:
        """Todas as permissões, ordenadas por módulo e nome."""
        statement = (
            select(Permission)
            .join(PermissionModule, Permission.module_id == PermissionModule.id)
            .order_by(PermissionModule.name, Permission.name)
        )
        return list(db.execute(statement).scalars().unique().all())

    def list_modules(self, db: Session) -> List[PermissionModule]:
        statement = select(PermissionModule).order_by(PermissionModule.name)
        return list(db.execute(statement).scalars().all())

    def sync_catalog(self, db: Session) -> Dict[str, int]:
        """
        Sincroniza módulos e permissões a partir de `app.core.permissions`.

        Cria o que falta e atualiza nome/descrição/módulo; o `code` nunca muda.
        Códigos presentes no banco mas ausentes da enumeração são apenas
        registrados em log. NÃO faz commit.
        """
        created = updated = 0

        existing_modules = {m.id: m for m in db.execute(select(PermissionModule)).scalars().all()}
        for definition in MODULES:
            module = existing_modules.get(definition.id)
            if module is None:
                db.add(PermissionModule(id=definition.id, name=definition.name, description=definition.description))
                created += 1
            elif (module.name, module.description) != (definition.name, definition.description):
                module.name = definition.name
                module.description = definition.description
                updated += 1
        db.flush()

        existing = {p.code: p for p in db.execute(select(Permission)).scalars().unique().all()}
        for definition in PERMISSIONS:
            perm = existing.get(definition.code.value)
            if perm is None:
                db.add(Permission(
                    code=definition.code.value,
                    name=definition.name,
                    description=definition.description,
                    module_id=definition.module_id,
                ))
                created += 1
            elif (perm.name, perm.description, perm.module_id) != (definition.name, definition.description, definition.module_id):
                perm.name = definition.name
                perm.description = definition.description
                perm.module_id = definition.module_id
                updated += 1
        db.flush()

        known = {code.value for code in PermissionCode}
        orphans = sorted(set(existing) - known)
        if orphans:
            logger.error(f"Códigos de permissão no banco sem correspondência no catálogo: {orphans}")

        logger.info(f"Catálogo de permissões sincronizado: {created} criados, {updated} atualizados.")
        return {"created": created, "updated": updated, "orphans": len(orphans)}

    # --- Concessões ---

    def grants_for(self, db: Session, user_id: UUID) -> Set[str]:
        """Conjunto de códigos concedidos ao usuário no momento da leitura."""
        statement = (
            select(Permission.code)
            .join(UserPermission, UserPermission.permission_id == Permission.id)
            .where(UserPermission.user_id == user_id)
        )
        return set(db.execute(statement).scalars().all())

    def list_for_user(self, db: Session, user_id: UUID) -> List[Dict[str, Any]]:
        """Catálogo completo com a marcação `granted` para o usuário."""
        if db.get(User, user_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuário não encontrado.")

        statement = (
            select(Permission, PermissionModule.name, UserPermission.user_id)
            .join(PermissionModule, Permission.module_id == PermissionModule.id)
            .outerjoin(
                UserPermission,
                and_(UserPermission.permission_id == Permission.id, UserPermission.user_id == user_id),
            )
            .order_by(PermissionModule.name, Permission.name)
        )
        rows = db.execute(statement).unique().all()
        return [
            {
                "id": perm.id,
                "code": perm.code,
                "name": perm.name,
                "description": perm.description,
                "module_id": perm.module_id,
                "module_name": module_name,
                "created_at": perm.created_at,
                "granted": grant_user_id is not None,
            }
            for perm, module_name, grant_user_id in rows
        ]

    def toggle(self, db: Session, *, user_id: UUID, permission_id: UUID, granted: bool) -> bool:
        """
        Concede (insere se ausente) ou revoga (remove se presente) uma permissão.

        Idempotente: repetir a mesma chamada não altera o estado nem gera erro.
        Retorna o estado resultante. NÃO faz commit.
        """
        if db.get(User, user_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuário não encontrado.")
        permission = self.get(db, permission_id)
        if permission is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Permissão não encontrada.")

        if granted:
            self._insert_grant(db, user_id=user_id, permission_id=permission_id)
            logger.info(f"Permissão '{permission.code}' concedida ao usuário {user_id}.")
        else:
            db.execute(
                delete(UserPermission).where(
                    UserPermission.user_id == user_id,
                    UserPermission.permission_id == permission_id,
                )
            )
            logger.info(f"Permissão '{permission.code}' revogada do usuário {user_id}.")
        return granted

    def _insert_grant(self, db: Session, *, user_id: UUID, permission_id: UUID) -> None:
        values = {"user_id": user_id, "permission_id": permission_id}
        dialect = db.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect)
        if insert_fn is not None:
            statement = insert_fn(UserPermission).values(**values).on_conflict_do_nothing(
                index_elements=["user_id", "permission_id"]
            )
            db.execute(statement)
            return

        # Dialetos sem ON CONFLICT: verifica antes de inserir
        logger.debug(f"Dialeto '{dialect}' sem ON CONFLICT; usando verificação prévia.")
        if db.get(UserPermission, (user_id, permission_id)) is None:
            db.add(UserPermission(**values))
            db.flush()


permission_service = PermissionService()
