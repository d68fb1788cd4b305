"""Errors raised by the discovery pipeline."""


class DiscoveryError(Exception):
    """Base class for discovery failures."""


class RequesterNotFoundError(DiscoveryError):
    """The requesting user id does not resolve to a user."""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class CandidateNotFoundError(DiscoveryError):
    """A candidate looked up by id does not exist."""

    def __init__(self, kind: str, candidate_id: str):
        super().__init__(f"{kind.capitalize()} not found: {candidate_id}")
        self.kind = kind
        self.candidate_id = candidate_id


class DiscoveryInternalError(DiscoveryError):
    """Unexpected data-access failure while building recommendations."""
