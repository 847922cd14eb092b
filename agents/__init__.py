"""
Agents module for the Itinerary Planner.
"""

from .itinerary_store import ItineraryStore
from .event_manager import EventManager
from .budget_agent import BudgetAgent
from .validation_agent import SuggestionValidator
from .suggestion_agent import SuggestionAgent

__all__ = [
    'ItineraryStore',
    'EventManager',
    'BudgetAgent',
    'SuggestionValidator',
    'SuggestionAgent'
]
