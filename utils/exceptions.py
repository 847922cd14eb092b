"""Exceptions raised by the itinerary planner."""


class ItineraryError(Exception):
    """Base class for itinerary management errors."""


class DuplicateTripError(ItineraryError):
    """An itinerary already exists for this trip."""

    def __init__(self, destination: str):
        self.destination = destination
        super().__init__(f"An itinerary for this trip already exists ({destination}).")


class MalformedResponseError(ValueError):
    """The LLM reply did not contain a usable JSON array."""


class LLMGatewayError(Exception):
    """The LLM request failed."""
