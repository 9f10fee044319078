# backend/app/errors.py


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ApiError):
    status_code = 400


class UnsupportedFileTypeError(InvalidInputError):
    def __init__(self, mimetype: str = ""):
        super().__init__("Unsupported file type")
        self.mimetype = mimetype


class AccessDeniedError(ApiError):
    status_code = 403

    def __init__(self, message: str = "Access denied: Requests from your origin are not allowed."):
        super().__init__(message)


class SimplificationError(ApiError):
    status_code = 500


class WordInfoError(ApiError):
    status_code = 500
