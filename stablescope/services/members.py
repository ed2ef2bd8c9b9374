"""Read-only membership dataset used by the reveal wizard."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..errors import InvalidInputError
from ..types import Member

OG_ROLE = "Plasma OG 👑"

_MEMBERS: List[Member] = [
    Member(name="badjon", joined="12.03.25", role=OG_ROLE, trillions=37),
    Member(name="CATT", joined="14.02.25", role=OG_ROLE, trillions=82),
    Member(name="crpbase", joined="15.03.25", role=OG_ROLE, trillions=108),
    Member(name="Dirty Squirrel", joined="17.03.25", role=OG_ROLE, trillions=142),
    Member(name="fungie", joined="05.01.25", role=OG_ROLE, trillions=329),
    Member(name="Happy", joined="13.03.25", role=OG_ROLE, trillions=80),
    Member(name="jojo.usdt", joined="25.03.25", role=OG_ROLE, trillions=595),
    Member(name="Lennart", joined="31.03.25", role=OG_ROLE, trillions=0),
    Member(name="Mario", joined="29.03.25", role=OG_ROLE, trillions=241),
    Member(name="onlinelink", joined="27.03.25", role=OG_ROLE, trillions=86),
    Member(name="primay.eth", joined="15.03.25", role=OG_ROLE, trillions=468),
    Member(name="Smart", joined="22.10.24", role=OG_ROLE, trillions=65),
    Member(name="Techaddict", joined="14.02.25", role=OG_ROLE, trillions=670),
]

_BY_NAME: Dict[str, Member] = {m.name.lower(): m for m in _MEMBERS}


def list_members() -> List[Member]:
    return list(_MEMBERS)


def find_member(name: str | None) -> Optional[Member]:
    """Case-insensitive exact lookup by nickname."""

    key = (name or "").strip().lower()
    if not key:
        raise InvalidInputError("nickname must not be empty")
    return _BY_NAME.get(key)
