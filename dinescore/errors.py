"""
Error taxonomy for the DineScore pipeline.

Only PlaceIdValidationError and PrimaryLookupFailure ever reach the HTTP
layer. ProviderUnavailable and SummarizationUnavailable are raised and
absorbed inside the component that owns the external call.
"""


class DineScoreError(Exception):
    """Base class for all DineScore errors."""


class PlaceIdValidationError(DineScoreError):
    """A place identifier does not have the shape of a provider place id."""

    def __init__(self, place_id: str, prefix: str):
        self.place_id = place_id
        self.prefix = prefix
        super().__init__(
            f"Invalid place id {place_id!r}. Only place ids starting with {prefix!r} are supported."
        )


class ProviderUnavailable(DineScoreError):
    """A review provider could not be reached or returned unusable data."""

    def __init__(self, platform: str, reason: str):
        self.platform = platform
        self.reason = reason
        super().__init__(f"{platform} unavailable: {reason}")


class PrimaryLookupFailure(DineScoreError):
    """The restaurant could not be resolved by the primary places provider."""

    def __init__(self, identity: str, reason: str = "Restaurant not found"):
        self.identity = identity
        self.reason = reason
        super().__init__(f"{reason}: {identity}")


class SummarizationUnavailable(DineScoreError):
    """The text generation service failed or is not configured."""
