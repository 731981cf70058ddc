"""Exceptions raised by projectfolio."""


class FolioError(Exception):
    """Base class for errors that abort a run."""

    pass


class MissingCredentialError(FolioError):
    """Raised when the remote host credential is not configured."""

    pass


class FetchError(FolioError):
    """Raised when the remote host returns an unusable response."""

    pass


class ConnectivityError(FetchError):
    """Raised when the remote host cannot be reached after retries."""

    pass


class AuthError(FetchError):
    """Raised when the remote host rejects the credential."""

    pass


class ManifestError(ValueError):
    """Raised for a document that is not a usable manifest mapping."""

    pass
