"""
Exceptions raised when listing resources fails.
"""


class ProviderError(Exception):
    """
    Base class for failures of a resource list call. The message is shown to the user as is.
    """

    kind = "Provider error"

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        return self.message


class CredentialError(ProviderError):
    """
    The credential chain failed to resolve usable credentials, or the resolved credentials were rejected.
    """

    kind = "Credential error"


class PermissionDeniedError(ProviderError):
    """
    The call was rejected by authorization.
    """

    kind = "Permission denied"


class NetworkError(ProviderError):
    """
    The call failed in transport.
    """

    kind = "Network error"
