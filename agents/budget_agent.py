from typing import Dict, Optional
from agents.event_manager import EventManager
from utils.data_structures import Itinerary
from utils.logging_utils import log_step

class BudgetAgent:
    """Agent for deriving spend and remaining budget from approved events."""
    
    def __init__(self, event_manager: Optional[EventManager] = None):
        self.event_manager = event_manager or EventManager()
    
    def spent(self, itinerary: Itinerary) -> float:
        """Total cost of approved events. Pending and rejected events are free."""
        return sum(e.cost for e in self.event_manager.approved_events(itinerary))
    
    def remaining_budget(self, itinerary: Itinerary) -> float:
        """Budget minus approved spend. May be negative."""
        remaining = itinerary.budget - self.spent(itinerary)
        if remaining < 0:
            log_step("BUDGET_AGENT", f"Approved events exceed budget for '{itinerary.trip.destination}' by ${-remaining:.2f}", level="warning")
        return remaining
    
    def calculate_budget_summary(self, itinerary: Itinerary) -> Dict:
        """Calculate budget summary."""
        log_step("BUDGET_AGENT", "Calculating budget summary")
        
        total_budget = itinerary.budget
        spent = self.spent(itinerary)
        
        summary = {
            "total_budget": total_budget,
            "spent": spent,
            "remaining_budget": total_budget - spent,
            "budget_utilization": (spent / total_budget * 100) if total_budget > 0 else 0,
            "approved_events": len(self.event_manager.approved_events(itinerary)),
            "pending_events": len(self.event_manager.pending_events(itinerary))
        }
        
        log_step("BUDGET_AGENT", f"Budget summary: {summary}")
        
        return summary
