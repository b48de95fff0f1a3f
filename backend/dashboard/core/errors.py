class LedgerError(Exception):
    message = "ledger error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(LedgerError):
    message = "invalid input"


class AccountNotFound(LedgerError):
    message = "user not found"

    def __init__(self, user_id: str | None = None):
        self.user_id = user_id
        super().__init__()


class StoreError(LedgerError):
    message = "store failure"
