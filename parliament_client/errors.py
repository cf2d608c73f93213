"""Client and sync errors."""


class ApiError(Exception):
    """External API fault."""

    def __init__(self, message: str = "External API error"):
        self.message = message
        super().__init__(self.message)


class ApiUnavailableError(ApiError):
    """A listing could not deliver even its first page after all retries."""

    def __init__(self, message: str = "External API unavailable"):
        super().__init__(message)


class MissingSessionError(Exception):
    """No parliamentary session is flagged as current."""

    def __init__(self, message: str = "No current session. Run: python sync_data.py session <parliament> <session> <start-date>"):
        self.message = message
        super().__init__(self.message)
