from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any
from pydantic import BaseModel, Field

@dataclass(eq=False)
class Trip:
    """A journey. Compared by identity: two trips with the same fields are distinct."""
    destination: str
    start_date: str
    end_date: str
    group_size: int = 1

@dataclass
class Event:
    """A proposed or decided activity within an itinerary."""
    name: str
    cost: float
    location: str
    start: str
    end: str
    pending: bool = True
    approved: bool = False

@dataclass
class Itinerary:
    """The full plan for one trip."""
    trip: Trip
    budget: float
    events: List[Event] = field(default_factory=list)
    finalized: bool = False

class Suggestion(BaseModel):
    """Activity proposed by the LLM."""
    name: str = Field(..., min_length=1)
    cost: float = 0.0
    category: str = ""
    location: str = ""
    duration_hours: float = Field(0.0, ge=0)
    
    @classmethod
    def from_llm(cls, item: Any) -> "Suggestion":
        """
        Build a suggestion from one raw LLM array entry.
        
        Missing or null optional fields get their defaults here.
        
        Raises:
            ValueError: entry is not an object or has no usable name
        """
        if not isinstance(item, dict):
            raise ValueError(f"Suggestion must be a JSON object, got {type(item).__name__}")
        
        duration = item.get("durationHours", item.get("duration_hours"))
        return cls(
            name=item.get("name"),
            cost=item.get("cost") or 0,
            category=item.get("category") or "",
            location=item.get("location") or "",
            duration_hours=duration or 0,
        )
    
    def to_llm_dict(self) -> Dict[str, Any]:
        """Serialize using the field names of the LLM schema."""
        return {
            "name": self.name,
            "cost": self.cost,
            "category": self.category,
            "location": self.location,
            "durationHours": self.duration_hours,
        }

class SuggestionDecision(BaseModel):
    """Accept/reject outcome for one candidate."""
    name: str
    accepted: bool
    reasons: List[str] = []
    suggestion: Optional[Suggestion] = None

class ValidationReport(BaseModel):
    """Decisions for every candidate of one suggestion request."""
    decisions: List[SuggestionDecision] = []
    
    @property
    def accepted(self) -> List[Suggestion]:
        return [d.suggestion for d in self.decisions if d.accepted and d.suggestion is not None]
    
    @property
    def rejected(self) -> List[SuggestionDecision]:
        return [d for d in self.decisions if not d.accepted]
    
    def summary(self) -> str:
        return f"{len(self.accepted)}/{len(self.decisions)} valid suggestions"
