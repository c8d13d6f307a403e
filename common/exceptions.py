class CommonError(Exception):
    """Base exception for common app errors"""

    pass


class BrigadeRequiredError(CommonError):
    def __init__(self, message="`brigade` is required to create an instance."):
        super().__init__(message)
