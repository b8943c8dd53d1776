from uuid import uuid4

import pytest

from tenantgate.app.services.authorization_gate import Actor
from tenantgate.app.use_cases.tenants.revoke_invitation_use_case import (
    RevokeInvitationUseCase,
)
from tenantgate.domain.entities import (
    Invitation,
    InvitationStatus,
    PlanKey,
    TokenPurpose,
    UserRole,
    UserStatus,
)


def _owner():
    return Actor(
        tenant_id=uuid4(),
        user_id=uuid4(),
        email="owner@acme.com",
        role=UserRole.owner,
        status=UserStatus.active,
        plan=PlanKey.free,
    )


@pytest.mark.asyncio
async def test_revoke_pending_invitation(mock_uow):
    actor = _owner()
    invitation = Invitation(tenant_id=actor.tenant_id, email="new@acme.com")
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await RevokeInvitationUseCase(mock_uow).execute(actor, invitation.id)

    assert result.is_ok()
    assert result.value.status == "revoked"
    assert invitation.status == InvitationStatus.revoked
    assert invitation.revoked_at is not None
    mock_uow.one_time_tokens.revoke.assert_called_once_with(
        TokenPurpose.invite, f"{actor.tenant_id}:new@acme.com"
    )
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_revoke_unknown_invitation(mock_uow):
    result = await RevokeInvitationUseCase(mock_uow).execute(_owner(), uuid4())

    assert result.is_err()
    assert result.error.code == "INVITATION_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_other_tenants_invitation(mock_uow):
    invitation = Invitation(tenant_id=uuid4(), email="new@other.com")
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await RevokeInvitationUseCase(mock_uow).execute(_owner(), invitation.id)

    assert result.is_err()
    assert result.error.code == "INVITATION_NOT_FOUND"
    assert invitation.status == InvitationStatus.pending
    mock_uow.one_time_tokens.revoke.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_accepted_invitation_conflicts(mock_uow):
    actor = _owner()
    invitation = Invitation(
        tenant_id=actor.tenant_id, email="new@acme.com", status=InvitationStatus.accepted
    )
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await RevokeInvitationUseCase(mock_uow).execute(actor, invitation.id)

    assert result.is_err()
    assert result.error.code == "INVITATION_ALREADY_ACCEPTED"
    mock_uow.one_time_tokens.revoke.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_twice_is_idempotent(mock_uow):
    actor = _owner()
    invitation = Invitation(
        tenant_id=actor.tenant_id, email="new@acme.com", status=InvitationStatus.revoked
    )
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await RevokeInvitationUseCase(mock_uow).execute(actor, invitation.id)

    assert result.is_ok()
    assert result.value.status == "revoked"
    mock_uow.invitations.update.assert_not_called()
