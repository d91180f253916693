from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Record(CamelModel):
    # stored records are never updated in place
    model_config = ConfigDict(frozen=True)


class User(Record):
    id: int
    username: str
    password_hash: str
    full_name: str
    referral_code: str
    goal_amount: int = 1000


class Charity(Record):
    id: int
    name: str
    description: str
    image_url: str
    category: str


class Donation(Record):
    id: int
    amount: int = Field(gt=0)
    donor_name: str
    referral_code: str
    message: str | None = None
    charity_id: int
    stripe_payment_id: str
    created_at: datetime = Field(default_factory=utc_now)


class NewUser(CamelModel):
    username: str
    password_hash: str
    full_name: str


class NewCharity(CamelModel):
    name: str
    description: str
    image_url: str
    category: str


class NewDonation(CamelModel):
    amount: int = Field(gt=0)
    donor_name: str = Field(min_length=1)
    referral_code: str = Field(min_length=1)
    message: str | None = None
    charity_id: int
    stripe_payment_id: str = Field(min_length=1)
