from pydantic import Field

from fundraiser.models.donation import CamelModel, NewDonation, User


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)


class LoginRequest(CamelModel):
    username: str
    password: str


class UserResponse(CamelModel):
    """Public view of a user; the password hash never leaves the store."""
    id: int
    username: str
    full_name: str
    referral_code: str
    goal_amount: int

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            referral_code=user.referral_code,
            goal_amount=user.goal_amount,
        )


class FundraiserResponse(CamelModel):
    user: UserResponse
    total: int


class PaymentIntentRequest(CamelModel):
    amount: int

class PaymentIntentResponse(CamelModel):
    client_secret: str


class DonationCreateRequest(NewDonation):
    pass


class MessageResponse(CamelModel):
    message: str
