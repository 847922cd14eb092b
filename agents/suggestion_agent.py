import json
from typing import List, Optional

from config import Config
from agents.budget_agent import BudgetAgent
from agents.event_manager import EventManager
from agents.validation_agent import SuggestionValidator
from utils.llm_client import LLMClient
from utils.json_parser import JSONParser
from utils.data_structures import Itinerary, Suggestion, ValidationReport
from utils.exceptions import MalformedResponseError
from utils.logging_utils import log_step, log_agent_communication, log_error, Timer
from utils.pydantic_compat import to_dict


class SuggestionAgent:
    """
    Asks the LLM for activity suggestions that fit an itinerary.

    Suggestions are best-effort: a failed LLM call, an unusable reply or a
    validation error is logged and yields an empty list, never an exception.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None,
                 budget_agent: Optional[BudgetAgent] = None,
                 validator: Optional[SuggestionValidator] = None,
                 event_manager: Optional[EventManager] = None):
        self.llm_client = llm_client or LLMClient()
        self.budget_agent = budget_agent or BudgetAgent()
        self.event_manager = event_manager or self.budget_agent.event_manager
        self.validator = validator or SuggestionValidator()
        self.json_parser = JSONParser()
        self.max_suggestions = Config.MAX_SUGGESTIONS
        self.last_report: Optional[ValidationReport] = None

    # ------------------------------------------------------------------
    # Main API
    # ------------------------------------------------------------------
    def request_suggestions(self, itinerary: Itinerary) -> List[Suggestion]:
        """Return validated suggestions for the itinerary, or [] on any failure."""
        self.last_report = None
        destination = itinerary.trip.destination
        remaining_budget = self.budget_agent.remaining_budget(itinerary)

        log_step("SUGGESTION_AGENT", f"Requesting suggestions for '{destination}' (remaining budget ${remaining_budget:.2f})")
        prompt = self.build_prompt(itinerary, remaining_budget)
        log_agent_communication(
            from_agent="SuggestionAgent",
            to_agent="LLM",
            message_type="suggestion_request",
            data={
                "remaining_budget": remaining_budget,
                "events": len(itinerary.events),
                "prompt_length": len(prompt)
            },
            destination=destination
        )

        try:
            with Timer("LLM suggestion request"):
                raw_response = self.llm_client.generate(prompt, temperature=Config.LLM_TEMPERATURE)
        except Exception as e:
            log_error("SuggestionAgent", "request_suggestions", e, context={"destination": destination})
            return []

        log_agent_communication(
            from_agent="LLM",
            to_agent="SuggestionAgent",
            message_type="suggestion_response",
            data={
                "response_length": len(raw_response) if isinstance(raw_response, str) else 0,
                "preview": str(raw_response)[:200]
            },
            destination=destination
        )

        try:
            raw_items = self.json_parser.extract_array(raw_response)
        except MalformedResponseError as e:
            model_error = self.json_parser.extract_error_message(raw_response)
            if model_error:
                log_step("SUGGESTION_AGENT", f"⚠️ LLM returned no suggestions: {model_error}", level="warning")
            else:
                log_step("SUGGESTION_AGENT", f"❌ LLM suggestion error: {e}", level="error")
            return []

        if len(raw_items) > self.max_suggestions:
            log_step("SUGGESTION_AGENT", f"LLM returned {len(raw_items)} suggestions, more than the {self.max_suggestions} requested", level="warning")

        try:
            accepted = self.validator.validate_all(raw_items, itinerary, remaining_budget)
        except Exception as e:
            log_error("SuggestionAgent", "validate_all", e, context={"destination": destination})
            return []

        self.last_report = self.validator.last_report
        log_step("SUGGESTION_AGENT", f"Returning {len(accepted)} suggestions")
        return accepted

    # ------------------------------------------------------------------
    # Prompt
    # ------------------------------------------------------------------
    def build_prompt(self, itinerary: Itinerary, remaining_budget: float) -> str:
        """Create the suggestion prompt from the itinerary state."""
        trip = itinerary.trip
        destination = trip.destination
        approved_events = [to_dict(e) for e in self.event_manager.approved_events(itinerary)]
        approved_block = json.dumps(approved_events) if approved_events else "None"

        return f"""You are a travel planner AI helping users plan trips.
Your task is to suggest attractions or dining locations in the destination that fit within the remaining budget.

TRIP INFORMATION:
- Trip destination: {destination}
- Trip time frame: {trip.start_date} to {trip.end_date}
- Group size: {trip.group_size}
- Remaining group budget: ${remaining_budget:.2f}
- Already approved events: {approved_block}

DESTINATION REASONING RULES:
1. If the destination name "{destination}" clearly refers to a real place, use that as the location for all suggestions.
2. If the destination name is vague or unclear, DO NOT assume a location.
   - Instead, look at the approved events listed above.
   - If at least one approved event exists, use the location(s) of those approved events as the trip destination.
3. If and only if there are no approved events AND the destination is vague, respond with:
   {{
     "error": "Unable to determine destination."
   }}
4. In all other cases, only suggest locations that are within the determined destination.

REQUIREMENTS:
- Suggest a mix of restaurants, cultural spots, and affordable activities.
- Each suggestion must fit within the remaining budget.
- Each suggestion must be something meaningful to do on a vacation, not a trivial or one-off task.
- Each suggestion must be specific and actionable, not vague or generic. If suggesting dining or shopping, name a specific place or experience that is well-known or typical for the destination.
- If the current itinerary already contains long or full-day activities, only suggest additional activities that are short (1 hour or less). Each suggestion must include a realistic "durationHours" value that fits into the remaining available time.
- Return {self.max_suggestions} suggestions at most.

Each activity must be represented strictly as a valid JSON object following this schema:
{{
  "name": "string - the name of the activity",
  "cost": number - approximate cost in USD,
  "category": "string - e.g. Sightseeing, Dining, Museum, Outdoor, Cultural",
  "location": "string - city and country where the activity occurs",
  "durationHours": number - approximate number of hours the activity takes
}}

If an error must be returned, return it as a JSON object:
{{
  "error": "string - error message"
}}

Return ONLY a JSON array of activity objects (or the error object). DO NOT include any explanations or text outside the JSON."""
