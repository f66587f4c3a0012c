"""Domain errors raised by the services and turned into HTTP responses by the app."""


class StreakQuestError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StreakQuestError):
    status_code = 404


class InvalidStateError(StreakQuestError):
    status_code = 400


class UserExistsError(StreakQuestError):
    status_code = 400


class GamificationNotFoundError(InvalidStateError):
    pass


class QRCodeNotFoundError(NotFoundError):
    # Unknown codes are reported the same way as expired ones
    status_code = 400


class InvalidQRCodeError(InvalidStateError):
    pass
