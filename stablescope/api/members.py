from fastapi import APIRouter, HTTPException
from ..errors import InvalidInputError
from ..services.members import find_member
from ..types import MemberResponse

router = APIRouter(prefix="/members")


@router.get("/{name}")
async def get_member(name: str) -> MemberResponse:
    """Look up a community member by nickname (case-insensitive)"""

    try:
        member = find_member(name)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    if member is None:
        raise HTTPException(status_code=404, detail=f"Member '{name.strip()}' not found")

    return MemberResponse(
        name=member.name,
        role=member.role,
        joined=member.joined_date(),
        trillions=member.trillions,
    )
