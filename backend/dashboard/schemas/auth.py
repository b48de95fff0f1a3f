from pydantic import BaseModel, Field

MIN_LEN = 5
MAX_USERNAME_LEN = 20
MAX_PASSWORD_LEN = 20

class LoginIn(BaseModel):
    username: str = Field(min_length=MIN_LEN, max_length=MAX_USERNAME_LEN)
    password: str = Field(min_length=MIN_LEN, max_length=MAX_PASSWORD_LEN)
    signing_up: bool = Field(alias="signingUp")

class LoginOut(BaseModel):
    uuid: str
    access_token: str
    token_type: str = "bearer"
