from playoff_pool.exceptions import PoolException


class DuplicateParticipantError(PoolException):
    def __init__(self, column: str, value: str) -> None:
        self.column = column
        self.value = value
        super().__init__(f"Participant with {column}={value!r} already exists")
