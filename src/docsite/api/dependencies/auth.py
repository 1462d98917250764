"""Authentication and tenant context dependencies."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.docsite.api.dependencies.repositories import MembershipRepo, TenantRepo, UserRepo
from src.docsite.core.logging import bind_user_context
from src.docsite.core.security import ACCESS_TOKEN_TYPE, decode_token
from src.docsite.core.tenant_context import TenantContext
from src.docsite.models import User


def _parse_uuid_claim(payload: dict[str, Any], claim: str) -> UUID:
    try:
        return UUID(str(payload.get(claim)))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid {claim} in token",
        ) from e


async def _validate_access_token(
    authorization: str | None,
    user_repo: UserRepo,
) -> tuple[dict[str, Any], User]:
    """Validate the bearer token and return (payload, user).

    Validates: header format, token decode, token type, user id, user exists + active.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )

    payload = decode_token(authorization[7:])
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    if not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    user = await user_repo.get_by_id(_parse_uuid_claim(payload, "sub"))
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )

    return payload, user


async def get_tenant_context(
    user_repo: UserRepo,
    tenant_repo: TenantRepo,
    membership_repo: MembershipRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> TenantContext:
    """Resolve the caller's identity and selected organization.

    A token without a ``tenant_id`` claim yields a context with no tenant;
    the project services reject or empty out such requests themselves.
    A selected tenant must be active and the caller must hold an active
    membership in it.
    """
    payload, user = await _validate_access_token(authorization, user_repo)

    if not payload.get("tenant_id"):
        bind_user_context(user.id, email=user.email)
        return TenantContext(user_id=user.id)

    tenant_id = _parse_uuid_claim(payload, "tenant_id")

    tenant = await tenant_repo.get_by_id(tenant_id)
    if tenant is None or not tenant.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Organization not found or inactive",
        )

    membership = await membership_repo.get_active_membership(user.id, tenant_id)
    if membership is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User does not have access to this tenant",
        )

    # Bind user and tenant context to logs
    bind_user_context(user.id, tenant_id, user.email)

    return TenantContext(user_id=user.id, tenant_id=tenant_id, role=membership.role_enum)


CurrentTenantContext = Annotated[TenantContext, Depends(get_tenant_context)]
