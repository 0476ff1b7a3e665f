DEFAULT_ERROR_CODE = 500


class BusinessException(Exception):
    """
    Application-level failure (duplicate username, unknown user, bad password).

    Carries an integer code and a human-readable message; the global exception
    handler renders both verbatim in the response envelope. Business rules in
    this service all use the default code.
    """

    def __init__(self, message: str, code: int = DEFAULT_ERROR_CODE):
        super().__init__(message)
        self.code = code
        self.message = message


# Messages shared by the service and its tests
USERNAME_EXISTS_MESSAGE = "Username already exists"
USER_NOT_FOUND_OR_DISABLED_MESSAGE = "User does not exist or is disabled"
PASSWORD_MISMATCH_MESSAGE = "Incorrect password"
USER_NOT_FOUND_MESSAGE = "User does not exist"
