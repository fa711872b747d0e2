"""Exceptions raised by the passwordless gate and its collaborators."""


class ConfigurationError(RuntimeError):
    """The gate was set up with an invalid combination of options."""


class FlashRequiresRedirect(ConfigurationError):
    """A flash message was configured without a redirect target."""

    def __init__(self, option: str = 'flash_user_not_auth') -> None:
        super().__init__(f'flash requires redirect target ({option})')


class FlashMiddlewareMissing(ConfigurationError):
    """A flash message was configured but no flash capability is present."""

    def __init__(self, option: str = 'flash_user_not_auth') -> None:
        super().__init__(f'flash middleware missing ({option})')


class NotInitialized(ConfigurationError):
    """The extension is used with an app it was never attached to."""


class TokenStoreError(RuntimeError):
    """The token store failed; distinct from a token that is not valid."""


class SessionStoreError(RuntimeError):
    """Failed to read or write the authenticated marker in the session."""
