import re
from typing import Any, List, Optional

from utils.data_structures import Event, Itinerary, Suggestion, SuggestionDecision, ValidationReport
from utils.logging_utils import log_step, log_agent_communication

DESTINATION_MISMATCH = "Destination mismatch"
OVER_BUDGET = "Exceeds remaining budget"
DUPLICATE_EVENT = "Duplicate of existing event"
MALFORMED = "Malformed suggestion"

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def normalize_location(text: str) -> str:
    """Lowercase, drop punctuation (keeping whitespace) and trim."""
    return _NON_ALNUM.sub("", (text or "").lower()).strip()


class SuggestionValidator:
    """
    Filters LLM suggestions through destination, budget and duplicate checks.
    
    Every check runs for every candidate so a rejection carries all of its
    reasons. A candidate that cannot be parsed is rejected without stopping
    the others.
    """

    def __init__(self):
        self.last_report: Optional[ValidationReport] = None

    def validate_destination(self, suggestion: Suggestion, destination: str,
                             events: List[Event]) -> bool:
        """Location must contain the trip destination or an existing event location."""
        suggestion_text = normalize_location(suggestion.location)
        if not suggestion_text:
            return False
        
        normalized_dest = normalize_location(destination)
        # An empty destination (e.g. "!!!") matches nothing, unlike a bare
        # substring test which would accept every location.
        if normalized_dest and normalized_dest in suggestion_text:
            return True
        
        itinerary_locations = [normalize_location(e.location) for e in events]
        return any(loc and loc in suggestion_text for loc in itinerary_locations)
    
    def validate_budget(self, suggestion: Suggestion, remaining_budget: float) -> bool:
        return (suggestion.cost or 0) <= remaining_budget
    
    def is_duplicate(self, suggestion: Suggestion, events: List[Event]) -> bool:
        name = suggestion.name.lower()
        return any(e.name.lower() == name for e in events)
    
    def review(self, raw_items: List[Any], itinerary: Itinerary,
               remaining_budget: float) -> ValidationReport:
        """Decide on every candidate, collecting all rejection reasons."""
        destination = itinerary.trip.destination
        events = itinerary.events
        decisions: List[SuggestionDecision] = []
        
        for item in raw_items:
            try:
                suggestion = Suggestion.from_llm(item)
            except (ValueError, TypeError) as e:
                name = item.get("name") if isinstance(item, dict) else None
                log_step("VALIDATOR", f"Unparseable suggestion {str(item)[:100]}: {e}", level="debug")
                decisions.append(SuggestionDecision(
                    name=str(name) if name else "<unnamed>",
                    accepted=False,
                    reasons=[MALFORMED],
                ))
                continue
            
            issues: List[str] = []
            if not self.validate_destination(suggestion, destination, events):
                issues.append(DESTINATION_MISMATCH)
            if not self.validate_budget(suggestion, remaining_budget):
                issues.append(OVER_BUDGET)
            if self.is_duplicate(suggestion, events):
                issues.append(DUPLICATE_EVENT)
            
            decisions.append(SuggestionDecision(
                name=suggestion.name,
                accepted=not issues,
                reasons=issues,
                suggestion=suggestion,
            ))
        
        return ValidationReport(decisions=decisions)
    
    def validate_all(self, raw_items: List[Any], itinerary: Itinerary,
                     remaining_budget: float) -> List[Suggestion]:
        """Return the accepted suggestions in their original order, logging each decision."""
        log_step("VALIDATOR", f"🔍 Validating {len(raw_items)} LLM suggestions")
        
        report = self.review(raw_items, itinerary, remaining_budget)
        self.last_report = report
        self.log_report(report)
        
        log_agent_communication(
            from_agent="SuggestionValidator",
            to_agent="SuggestionAgent",
            message_type="validation_complete",
            data={
                "candidates": len(report.decisions),
                "accepted": len(report.accepted),
                "remaining_budget": remaining_budget
            },
            destination=itinerary.trip.destination
        )
        
        return report.accepted
    
    def log_report(self, report: ValidationReport) -> None:
        for decision in report.decisions:
            if decision.accepted:
                log_step("VALIDATOR", f"✅ Accepted \"{decision.name}\"")
            else:
                log_step("VALIDATOR", f"❌ Rejected \"{decision.name}\": {'; '.join(decision.reasons)}", level="warning")
        log_step("VALIDATOR", f"✨ Validation complete: {report.summary()}")
