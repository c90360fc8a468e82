"""Error taxonomy for marketplace operations.

Every error carries a ``messages`` dict shaped like Protean's
``ValidationError`` (``{"field": ["reason", ...]}``) so clients can render a
specific reason, plus a stable ``code`` and the HTTP status it maps to.
"""


class MarketplaceError(Exception):
    code = "error"
    status_code = 400

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__(messages)


class InvalidArgument(MarketplaceError):
    """Malformed or out-of-range caller input."""

    code = "invalid_argument"
    status_code = 400


class NotFound(MarketplaceError):
    """A referenced cart, order, item or product does not exist."""

    code = "not_found"
    status_code = 404


class Unavailable(MarketplaceError):
    """The product exists but cannot be purchased right now."""

    code = "unavailable"
    status_code = 409


class Forbidden(MarketplaceError):
    """The caller has no rights over this specific resource."""

    code = "forbidden"
    status_code = 403


class InvalidState(MarketplaceError):
    """The operation is not permitted in the resource's current lifecycle state."""

    code = "invalid_state"
    status_code = 409


class StorageFailure(MarketplaceError):
    """The store could not be read or written."""

    code = "storage_failure"
    status_code = 500
