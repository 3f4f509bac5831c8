"""Error types raised by the ingestion pipeline and the history logs."""


class DonoError(Exception):
    """Base class for every error Dono surfaces to callers."""

    status_code = 500

    def to_dict(self):
        return {"error": str(self), "type": type(self).__name__}


class ConfigurationError(DonoError):
    """Required configuration is missing. Fatal at startup."""


class InvalidSourceError(DonoError):
    """No media could be identified from the submitted source."""

    status_code = 400

    def __init__(self, source: str):
        super().__init__(f"invalid source: {source!r}")
        self.source = source

    def to_dict(self):
        return {**super().to_dict(), "source": self.source}


class TransportError(DonoError):
    """The metadata API could not be reached."""

    status_code = 502


class RemoteStatusError(DonoError):
    """The metadata API answered with a non-2xx status."""

    status_code = 502

    def __init__(self, status: int, reason: str):
        super().__init__(f"{status} {reason}")
        self.status = status
        self.reason = reason

    def to_dict(self):
        return {**super().to_dict(), "status": self.status, "reason": self.reason}


class EmptyCatalogError(DonoError):
    """The lookup succeeded but the catalog had no entry for the id."""

    status_code = 404

    def __init__(self, video_id: str):
        super().__init__(f"no catalog entry for {video_id}")
        self.video_id = video_id


class DeserializationError(DonoError):
    """The metadata response body did not have the expected shape."""

    status_code = 502


class StorageError(DonoError):
    """A persistence operation failed."""


class NotFoundError(DonoError):
    """The requested record does not exist in the log."""

    status_code = 404
