from datetime import date, datetime
from pydantic import BaseModel, Field


class Member(BaseModel):
    name: str = Field(description="Community nickname")
    joined: str = Field(description="Join date as DD.MM.YY")
    role: str = Field(description="Community role")
    trillions: int = Field(ge=0, description="Membership stat shown in the reveal step")

    def joined_date(self) -> date:
        return datetime.strptime(self.joined, "%d.%m.%y").date()
