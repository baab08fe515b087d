"""Error taxonomy for the translator."""


class LingoLiveError(Exception):
    """Base error for recoverable translator failures."""


class CapabilityUnavailableError(LingoLiveError):
    """Speech capture is not supported by the host environment."""


class AuthenticationError(LingoLiveError):
    """Anonymous sign-in with the identity provider failed."""


class TranslationError(LingoLiveError):
    """The translation endpoint failed or returned an empty result."""


class PersistenceError(LingoLiveError):
    """A history store write or read failed."""


class ConfigurationMissingError(LingoLiveError):
    """The history store is not configured."""
