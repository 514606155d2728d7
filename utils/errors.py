class BatchRequestError(Exception):
    """
    The batch request itself is unusable (missing identifier, unknown or closed year).
    Raised before any student is processed; middlewares/error_handler.py turns it into a 400.
    """

    def __init__(self, message: str, code: str = "BAD_REQUEST"):
        super().__init__(message)
        self.message = message
        self.code = code
