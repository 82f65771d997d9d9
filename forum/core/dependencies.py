from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from forum.core.database import get_db
from forum.models.member import Member
from forum.services.member import MemberService


def get_acting_member(
    logged_in_member_id: int = Query(..., ge=1, description="ID of the acting member"),
    db: Session = Depends(get_db),
) -> Member:
    """
    Dependency that resolves the member performing the request.
    Raises 401 if the member does not exist and 403 if the account is inactive.
    """
    member = MemberService(db).get_member(logged_in_member_id)

    if not member:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Member not found",
        )

    if not member.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Inactive member"
        )

    return member


def get_optional_member(
    logged_in_member_id: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
) -> Optional[Member]:
    """Like get_acting_member, but anonymous or unknown callers resolve to None."""
    if logged_in_member_id is None:
        return None

    member = MemberService(db).get_member(logged_in_member_id)
    if not member or not member.is_active:
        return None

    return member


def get_acting_admin(
    member: Member = Depends(get_acting_member),
    db: Session = Depends(get_db),
) -> Member:
    """Access-layer guard for moderation endpoints (hide, restore, report review)."""
    if not MemberService(db).is_admin(member.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return member
