class LedgerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidParticipant(LedgerError):
    pass


class DuplicateParticipant(InvalidParticipant):
    pass


class SplitMismatch(LedgerError):
    def __init__(self, expected, actual):
        super().__init__(
            f"Split amounts must equal the total amount: expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class GroupNotFound(LedgerError):
    status_code = 404


class UserNotFound(LedgerError):
    status_code = 404


class ExpenseNotFound(LedgerError):
    status_code = 404
