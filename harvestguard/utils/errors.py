"""Exception types raised across HarvestGuard."""


class HarvestGuardError(Exception):
    """Base error for the advisory core."""


class CropStateError(HarvestGuardError, ValueError):
    """Crop batch fields do not match its stage, or an invalid transition."""


class DeliveryError(HarvestGuardError):
    """A notification channel could not deliver."""


class PersistenceError(HarvestGuardError):
    """Key-value store read or write failed."""


class SyncError(HarvestGuardError):
    """A pending action could not be replayed against the server."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
