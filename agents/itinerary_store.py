from typing import Iterator, List, Optional

from utils.data_structures import Trip, Itinerary
from utils.exceptions import DuplicateTripError
from utils.logging_utils import log_step

class ItineraryStore:
    """In-memory registry holding one itinerary per trip object."""
    
    def __init__(self):
        self._itineraries: List[Itinerary] = []
    
    def create(self, trip: Trip, budget: float) -> Itinerary:
        """
        Create and register a new itinerary for a trip.
        
        Raises:
            DuplicateTripError: this exact trip already has an itinerary
        """
        if self.get(trip) is not None:
            log_step("ITINERARY_STORE", f"Rejected duplicate itinerary for '{trip.destination}'", level="warning")
            raise DuplicateTripError(trip.destination)
        
        itinerary = Itinerary(trip=trip, budget=budget)
        self._itineraries.append(itinerary)
        
        log_step("ITINERARY_STORE", f"Created itinerary for '{trip.destination}' ({trip.start_date} to {trip.end_date}) with budget ${budget:.2f}")
        return itinerary
    
    def get(self, trip: Trip) -> Optional[Itinerary]:
        """Return the itinerary registered for this trip object, if any."""
        for itinerary in self._itineraries:
            if itinerary.trip is trip:
                return itinerary
        return None
    
    def __contains__(self, trip: Trip) -> bool:
        return self.get(trip) is not None
    
    def __len__(self) -> int:
        return len(self._itineraries)
    
    def __iter__(self) -> Iterator[Itinerary]:
        return iter(list(self._itineraries))
