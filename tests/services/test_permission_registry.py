import uuid

import pytest
from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.permissions import PERMISSIONS, MODULES
from app.models.permission import Permission
from app.models.permission_module import PermissionModule
from app.models.user import User
from app.models.user_permission import UserPermission
from app.services.permission import permission_service


def _grant_count(db: Session, user_id) -> int:
    return db.execute(
        select(func.count()).select_from(UserPermission).where(UserPermission.user_id == user_id)
    ).scalar_one()


def test_sync_catalog_seeds_everything(db: Session):
    assert db.execute(select(func.count()).select_from(Permission)).scalar_one() == len(PERMISSIONS)
    assert db.execute(select(func.count()).select_from(PermissionModule)).scalar_one() == len(MODULES)


def test_sync_catalog_is_idempotent_and_restores_names(db: Session):
    perm = permission_service.get_by_code(db, code="clients.view")
    perm.name = "Nome alterado"
    db.commit()

    result = permission_service.sync_catalog(db)
    db.commit()

    assert result["created"] == 0
    assert result["updated"] == 1
    assert permission_service.get_by_code(db, code="clients.view").name == "Visualizar Clientes"


def test_sync_catalog_logs_orphan_codes(db: Session, caplog):
    db.add(Permission(code="legacy.export", name="Exportar", module_id="reports"))
    db.commit()

    result = permission_service.sync_catalog(db)

    assert result["orphans"] == 1
    assert "legacy.export" in caplog.text
    # Códigos órfãos não são removidos
    assert permission_service.is_known_code(db, code="legacy.export")


def test_toggle_is_idempotent(db: Session, cliente_user: User):
    perm = permission_service.get_by_code(db, code="certificates.delete")

    assert permission_service.toggle(db, user_id=cliente_user.id, permission_id=perm.id, granted=True) is True
    assert permission_service.toggle(db, user_id=cliente_user.id, permission_id=perm.id, granted=True) is True
    db.commit()
    assert _grant_count(db, cliente_user.id) == 1
    assert permission_service.grants_for(db, cliente_user.id) == {"certificates.delete"}

    assert permission_service.toggle(db, user_id=cliente_user.id, permission_id=perm.id, granted=False) is False
    assert permission_service.toggle(db, user_id=cliente_user.id, permission_id=perm.id, granted=False) is False
    db.commit()
    assert _grant_count(db, cliente_user.id) == 0


def test_revoking_never_granted_permission_is_a_no_op(db: Session, tecnico_user: User):
    perm = permission_service.get_by_code(db, code="clients.delete")
    before = permission_service.grants_for(db, tecnico_user.id)

    permission_service.toggle(db, user_id=tecnico_user.id, permission_id=perm.id, granted=False)
    db.commit()

    assert permission_service.grants_for(db, tecnico_user.id) == before == {"certificates.view"}


def test_toggle_unknown_user_or_permission_returns_404(db: Session, cliente_user: User):
    perm = permission_service.get_by_code(db, code="clients.view")
    with pytest.raises(HTTPException) as exc_info:
        permission_service.toggle(db, user_id=uuid.uuid4(), permission_id=perm.id, granted=True)
    assert exc_info.value.status_code == 404

    with pytest.raises(HTTPException) as exc_info:
        permission_service.toggle(db, user_id=cliente_user.id, permission_id=uuid.uuid4(), granted=True)
    assert exc_info.value.status_code == 404


def test_list_for_user_flags_granted_permissions(db: Session, tecnico_user: User):
    items = permission_service.list_for_user(db, tecnico_user.id)

    assert len(items) == len(PERMISSIONS)
    granted = {item["code"] for item in items if item["granted"]}
    assert granted == {"certificates.view"}
    certificate_view = next(item for item in items if item["code"] == "certificates.view")
    assert certificate_view["module_name"] == "Certificados"


def test_grants_are_read_fresh_on_every_call(db: Session, cliente_user: User):
    assert permission_service.grants_for(db, cliente_user.id) == set()
    perm = permission_service.get_by_code(db, code="standards.view")
    permission_service.toggle(db, user_id=cliente_user.id, permission_id=perm.id, granted=True)
    assert permission_service.grants_for(db, cliente_user.id) == {"standards.view"}
