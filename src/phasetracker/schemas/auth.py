from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AdminSignupRequest(BaseModel):
    """Admin signup. The account stays unverified until the emailed code is redeemed."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    first_name: str = Field(min_length=1, max_length=100, alias="firstName")
    last_name: str = Field(min_length=1, max_length=100, alias="lastName")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class VerifyCodeRequest(BaseModel):
    """Code redemption for both admin verification and client login.

    The code is not length-checked here; a malformed code is simply invalid.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: EmailStr
    code: str


class ClientCodeRequest(BaseModel):
    email: EmailStr


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str
