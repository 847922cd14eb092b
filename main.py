#!/usr/bin/env python3
"""
main.py

Defines ItineraryPlanner, the single entry point for:
1) Creating one itinerary per trip
2) Adding, editing and approving events
3) Tracking the remaining budget from approved events
4) Requesting validated LLM activity suggestions

Run directly to walk through the demo scenarios:
    python main.py            # all scenarios (needs a running Ollama server)
    python main.py --offline  # manual itinerary only
"""

import os
import sys
import json
import argparse
from typing import Any, Dict, List, Optional

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import Config

from agents.itinerary_store import ItineraryStore
from agents.event_manager import EventManager
from agents.budget_agent import BudgetAgent
from agents.suggestion_agent import SuggestionAgent

from utils.data_structures import Trip, Event, Itinerary, Suggestion
from utils.llm_client import LLMClient
from utils.logging_utils import setup_logging, log_step
from utils.pydantic_compat import to_dict


def _json_safe(obj: Any):
    """Best-effort conversion to JSON-serializable types."""
    if isinstance(obj, Suggestion):
        return obj.to_llm_dict()
    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj
    if isinstance(obj, list):
        return [_json_safe(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _json_safe(v) for k, v in obj.items()}
    try:
        return to_dict(obj)
    except (TypeError, ValueError):
        return str(obj)


class ItineraryPlanner:
    """
    Facade over the store, event manager, budget agent and suggestion agent.

    Itinerary errors (a duplicate trip) propagate to the caller. Suggestion
    errors never do: they come back as an empty list.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm_client = llm_client
        self.store = ItineraryStore()
        self.event_manager = EventManager()
        self.budget_agent = BudgetAgent(event_manager=self.event_manager)
        self._suggestion_agent: Optional[SuggestionAgent] = None

    @property
    def suggestion_agent(self) -> SuggestionAgent:
        # Built on first use so offline planning never touches the LLM config.
        if self._suggestion_agent is None:
            self._suggestion_agent = SuggestionAgent(
                llm_client=self.llm_client,
                budget_agent=self.budget_agent,
            )
        return self._suggestion_agent

    # ----------------------------
    # Itineraries and events
    # ----------------------------
    def create(self, trip: Trip, budget: float) -> Itinerary:
        return self.store.create(trip, budget)

    def add_event(self, name: str, cost: float, location: str,
                  itinerary: Itinerary, start: str, end: str) -> Event:
        return self.event_manager.add_event(name, cost, location, itinerary, start, end)

    def update_event(self, event: Event, name: str, cost: float, start: str, end: str) -> None:
        self.event_manager.update_event(event, name, cost, start, end)

    def set_event_approval(self, event: Event, approved: bool) -> None:
        self.event_manager.set_event_approval(event, approved)

    def finalize_itinerary(self, itinerary: Itinerary, finalized: bool) -> None:
        self.event_manager.finalize_itinerary(itinerary, finalized)

    def get_remaining_budget(self, itinerary: Itinerary) -> float:
        return self.budget_agent.remaining_budget(itinerary)

    # ----------------------------
    # Suggestions
    # ----------------------------
    def request_suggestions(self, itinerary: Itinerary) -> List[Suggestion]:
        return self.suggestion_agent.request_suggestions(itinerary)


# ----------------------------
# Demo scenarios
# ----------------------------
def _print_json(label: str, data: Any) -> None:
    print(f"\n{label}", json.dumps(_json_safe(data), indent=2, ensure_ascii=False))


def scenario_manual_itinerary(planner: ItineraryPlanner) -> Dict[str, Any]:
    print("\n🧪 Manual Itinerary Creation")
    trip = Trip("Kyoto, Japan", "2025-04-01", "2025-04-07", 2)
    itinerary = planner.create(trip, 1500)

    planner.add_event("Visit Fushimi Inari Shrine", 100, "Kyoto, Japan", itinerary,
                      "2025-04-02T09:00:00Z", "2025-04-02T10:00:00Z")
    planner.add_event("Try matcha desserts in Gion", 30, "Kyoto, Japan", itinerary,
                      "2025-04-02T15:00:00Z", "2025-04-02T16:00:00Z")
    for event in itinerary.events:
        planner.set_event_approval(event, True)
    planner.finalize_itinerary(itinerary, True)

    summary = planner.budget_agent.calculate_budget_summary(itinerary)
    _print_json("✅ Finalized itinerary:", itinerary)
    _print_json("💰 Budget:", summary)
    return summary


def scenario_well_defined_trip(planner: ItineraryPlanner) -> List[Suggestion]:
    print("\n🧪 Suggestions for a Well-Defined Trip")
    itinerary = planner.create(Trip("Rome, Italy", "2025-06-01", "2025-06-14", 4), 2500)
    event = planner.add_event("Colosseum Tour", 150, "Rome, Italy", itinerary,
                              "2025-06-03T10:00:00Z", "2025-06-03T12:00:00Z")
    planner.set_event_approval(event, True)
    return planner.request_suggestions(itinerary)


def scenario_ambiguous_with_event(planner: ItineraryPlanner) -> List[Suggestion]:
    print("\n🧪 Ambiguous Destination with an Approved Event")
    itinerary = planner.create(Trip("Spring Break", "2025-03-10", "2025-03-17", 1), 1200)
    event = planner.add_event("Colosseum Tour", 150, "Rome, Italy", itinerary,
                              "2025-03-11T10:00:00Z", "2025-03-11T12:00:00Z")
    planner.set_event_approval(event, True)
    return planner.request_suggestions(itinerary)


def scenario_ambiguous_empty(planner: ItineraryPlanner) -> List[Suggestion]:
    print("\n🧪 Ambiguous Destination with an Empty Itinerary")
    itinerary = planner.create(Trip("Spring Break", "2025-03-10", "2025-03-17", 1), 1200)
    return planner.request_suggestions(itinerary)


def scenario_low_budget(planner: ItineraryPlanner) -> List[Suggestion]:
    print("\n🧪 Extremely Low Budget")
    itinerary = planner.create(Trip("Paris, France", "2025-07-01", "2025-07-10", 1), 15)
    return planner.request_suggestions(itinerary)


def scenario_full_itinerary(planner: ItineraryPlanner) -> List[Suggestion]:
    print("\n🧪 Full Itinerary Conflict")
    itinerary = planner.create(Trip("New York City, USA", "2025-12-20", "2025-12-21", 4), 2000)
    event = planner.add_event("Event that takes up most of the day", 150, "New York City, USA",
                              itinerary, "2025-12-20T00:00:00Z", "2025-12-20T23:00:00Z")
    planner.set_event_approval(event, True)
    return planner.request_suggestions(itinerary)


LLM_SCENARIOS = [
    scenario_well_defined_trip,
    scenario_ambiguous_with_event,
    scenario_ambiguous_empty,
    scenario_low_budget,
    scenario_full_itinerary,
]


def run_scenarios(planner: ItineraryPlanner, offline: bool = False) -> int:
    """Run the demo scenarios and return a process exit code."""
    scenario_manual_itinerary(planner)

    if offline:
        log_step("MAIN", "Offline mode: skipping LLM scenarios")
        return 0

    if not planner.suggestion_agent.llm_client.check_health():
        log_step("MAIN", f"LLM server not reachable at {Config.OLLAMA_BASE_URL}; skipping LLM scenarios", level="warning")
        return 1

    for scenario in LLM_SCENARIOS:
        suggestions = scenario(planner)
        _print_json("📍 AI Suggestions:", suggestions)

    print("\n🎉 All scenarios completed.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Itinerary planner demo scenarios")
    parser.add_argument("--offline", action="store_true", help="skip scenarios that call the LLM")
    parser.add_argument("--model", default=None, help="Ollama model name (default: Config.LLAMA_MODEL_NAME)")
    args = parser.parse_args(argv)

    setup_logging()
    Config.validate_config()

    llm_client = None if args.offline else LLMClient(model=args.model)
    return run_scenarios(ItineraryPlanner(llm_client=llm_client), offline=args.offline)


if __name__ == "__main__":
    sys.exit(main())
