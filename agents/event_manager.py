from typing import List

from utils.data_structures import Event, Itinerary
from utils.logging_utils import log_step

class EventManager:
    """Creates and updates events in place and tracks their approval state."""
    
    def add_event(self, name: str, cost: float, location: str,
                  itinerary: Itinerary, start: str, end: str) -> Event:
        """Append a new pending event to the itinerary."""
        event = Event(
            name=name,
            cost=cost,
            location=location,
            start=start,
            end=end,
            pending=True,
            approved=False,
        )
        itinerary.events.append(event)
        log_step("EVENT_MANAGER", f"Added pending event '{name}' (${cost}) at {location}")
        return event
    
    def update_event(self, event: Event, name: str, cost: float,
                     start: str, end: str) -> None:
        """Overwrite an event's details. Approval state is left as it is."""
        event.name = name
        event.cost = cost
        event.start = start
        event.end = end
        log_step("EVENT_MANAGER", f"Updated event '{name}'", level="debug")
    
    def set_event_approval(self, event: Event, approved: bool) -> None:
        """Record an approval decision; the event is no longer pending."""
        event.approved = approved
        event.pending = False
        log_step("EVENT_MANAGER", f"Event '{event.name}' {'approved' if approved else 'rejected'}")
    
    def finalize_itinerary(self, itinerary: Itinerary, finalized: bool) -> None:
        itinerary.finalized = finalized
        log_step("EVENT_MANAGER", f"Itinerary for '{itinerary.trip.destination}' finalized={finalized}")
    
    def pending_events(self, itinerary: Itinerary) -> List[Event]:
        return [e for e in itinerary.events if e.pending]
    
    def approved_events(self, itinerary: Itinerary) -> List[Event]:
        return [e for e in itinerary.events if e.approved]
