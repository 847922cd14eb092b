"""
Utilities module for the Itinerary Planner.
"""

from .llm_client import LLMClient
from .data_structures import (
    Trip, Event, Itinerary, Suggestion,
    SuggestionDecision, ValidationReport
)
from .exceptions import (
    ItineraryError, DuplicateTripError,
    MalformedResponseError, LLMGatewayError
)
from .json_parser import JSONParser
from .logging_utils import setup_logging, log_step
from .pydantic_compat import to_dict

__all__ = [
    'LLMClient',
    'Trip', 'Event', 'Itinerary', 'Suggestion',
    'SuggestionDecision', 'ValidationReport',
    'ItineraryError', 'DuplicateTripError',
    'MalformedResponseError', 'LLMGatewayError',
    'JSONParser',
    'setup_logging', 'log_step',
    'to_dict'
]
