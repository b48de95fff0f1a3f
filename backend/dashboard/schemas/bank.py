from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _finite(v: float, name: str):
    if v != v:
        raise ValueError(f"{name} must be a number")
    if v == float("inf") or v == float("-inf"):
        raise ValueError(f"{name} must be finite")
    return v


class TransactIn(BaseModel):
    uuid: UUID
    amount: float
    adding: bool = False

    @field_validator("amount")
    @classmethod
    def amount_finite(cls, v: float):
        return _finite(v, "amount")


class TransactOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_balance: float = Field(serialization_alias="newBalance")


class SetAllowanceIn(BaseModel):
    uuid: UUID
    allowance: float

    @field_validator("allowance")
    @classmethod
    def allowance_finite(cls, v: float):
        return _finite(v, "allowance")


class HistoryEntryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    balance: float
    iso_timestamp: str = Field(serialization_alias="isoTimestamp")


class BankAccountOut(BaseModel):
    balance: float
    allowance: float
    history: list[HistoryEntryOut]
