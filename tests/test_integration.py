import unittest
import json
from unittest.mock import Mock, patch

from main import ItineraryPlanner, run_scenarios, main
from utils.data_structures import Trip
from utils.exceptions import DuplicateTripError

class TestIntegrationPipeline(unittest.TestCase):
    """Integration tests for the complete planning flow."""

    def setUp(self):
        self.mock_llm = Mock()
        self.planner = ItineraryPlanner(llm_client=self.mock_llm)

    def test_complete_pipeline(self):
        """Plan a trip, approve events and ask for suggestions."""
        trip = Trip("Rome, Italy", "2025-06-01", "2025-06-14", 4)
        itinerary = self.planner.create(trip, 2500)

        tour = self.planner.add_event("Colosseum Tour", 150, "Rome, Italy", itinerary,
                                      "2025-06-03T10:00:00Z", "2025-06-03T12:00:00Z")
        self.planner.add_event("Helicopter Ride", 2000, "Rome, Italy", itinerary,
                               "2025-06-04T10:00:00Z", "2025-06-04T11:00:00Z")
        self.planner.set_event_approval(tour, True)
        self.assertEqual(self.planner.get_remaining_budget(itinerary), 2350)

        self.mock_llm.generate.return_value = "Here are my picks:\n" + json.dumps([
            {"name": "Vatican Museums", "cost": 120, "category": "Museum",
             "location": "Vatican City, Rome, Italy", "durationHours": 4},
            {"name": "colosseum tour", "cost": 60, "category": "Sightseeing",
             "location": "Rome, Italy", "durationHours": 2},
            {"name": "Private Villa Dinner", "cost": 3000, "category": "Dining",
             "location": "Rome, Italy", "durationHours": 3},
            {"name": "Sagrada Familia", "cost": 30, "category": "Sightseeing",
             "location": "Barcelona, Spain", "durationHours": 2},
            {"name": "Roscioli Salumeria", "category": "Dining",
             "location": "Rome, Italy", "durationHours": 1.5}
        ])

        suggestions = self.planner.request_suggestions(itinerary)

        self.assertEqual([s.name for s in suggestions], ["Vatican Museums", "Roscioli Salumeria"])
        self.assertEqual(suggestions[1].cost, 0)
        self.assertEqual(len(itinerary.events), 2)

        self.planner.finalize_itinerary(itinerary, True)
        self.assertTrue(itinerary.finalized)

    def test_duplicate_trip_propagates(self):
        trip = Trip("Kyoto, Japan", "2025-04-01", "2025-04-07", 2)
        self.planner.create(trip, 1500)

        with self.assertRaises(DuplicateTripError):
            self.planner.create(trip, 1500)

        twin = Trip("Kyoto, Japan", "2025-04-01", "2025-04-07", 2)
        self.assertIsNotNone(self.planner.create(twin, 1500))

    def test_ambiguous_destination_empty_itinerary(self):
        """Suggestions are never returned without a destination to justify them."""
        itinerary = self.planner.create(Trip("Spring Break", "2025-03-10", "2025-03-17", 1), 1200)

        responses = [
            json.dumps({"error": "Unable to determine destination."}),
            json.dumps([
                {"name": "Coco Bongo", "cost": 90, "category": "Nightlife",
                 "location": "Cancun, Mexico", "durationHours": 5},
                {"name": "South Beach", "cost": 0, "category": "Outdoor",
                 "location": "Miami, USA", "durationHours": 3}
            ]),
        ]

        for response in responses:
            self.mock_llm.generate.return_value = response
            self.assertEqual(self.planner.request_suggestions(itinerary), [])

    def test_ambiguous_destination_uses_event_locations(self):
        itinerary = self.planner.create(Trip("Spring Break", "2025-03-10", "2025-03-17", 1), 1200)
        event = self.planner.add_event("Colosseum Tour", 150, "Rome, Italy", itinerary,
                                       "2025-03-11T10:00:00Z", "2025-03-11T12:00:00Z")
        self.planner.set_event_approval(event, True)

        self.mock_llm.generate.return_value = json.dumps([
            {"name": "Trastevere Food Tour", "cost": 80, "category": "Dining",
             "location": "Trastevere, Rome, Italy", "durationHours": 3},
            {"name": "Uffizi Gallery", "cost": 25, "category": "Museum",
             "location": "Florence, Italy", "durationHours": 3}
        ])

        suggestions = self.planner.request_suggestions(itinerary)

        self.assertEqual([s.location for s in suggestions], ["Trastevere, Rome, Italy"])

    def test_pipeline_with_llm_failure(self):
        """A failing LLM never breaks itinerary management."""
        itinerary = self.planner.create(Trip("Paris, France", "2025-07-01", "2025-07-10", 1), 15)
        self.mock_llm.generate.side_effect = Exception("LLM failed")

        self.assertEqual(self.planner.request_suggestions(itinerary), [])

        event = self.planner.add_event("Seine Walk", 0, "Paris, France", itinerary,
                                       "2025-07-02T18:00:00Z", "2025-07-02T19:00:00Z")
        self.planner.set_event_approval(event, True)
        self.assertEqual(self.planner.get_remaining_budget(itinerary), 15)

    def test_update_event_keeps_approval(self):
        itinerary = self.planner.create(Trip("Rome, Italy", "2025-06-01", "2025-06-14", 4), 1000)
        event = self.planner.add_event("Colosseum Tour", 150, "Rome, Italy", itinerary,
                                       "2025-06-03T10:00:00Z", "2025-06-03T12:00:00Z")
        self.planner.set_event_approval(event, True)

        self.planner.update_event(event, "Colosseum Tour", 400,
                                  "2025-06-03T10:00:00Z", "2025-06-03T12:00:00Z")

        self.assertTrue(event.approved)
        self.assertEqual(self.planner.get_remaining_budget(itinerary), 600)

class TestScenarios(unittest.TestCase):
    def test_offline_scenarios(self):
        planner = ItineraryPlanner()

        self.assertEqual(run_scenarios(planner, offline=True), 0)
        self.assertEqual(len(planner.store), 1)
        itinerary = next(iter(planner.store))
        self.assertTrue(itinerary.finalized)
        self.assertEqual(planner.get_remaining_budget(itinerary), 1370)

    def test_llm_scenarios(self):
        mock_llm = Mock()
        mock_llm.check_health.return_value = True
        mock_llm.generate.return_value = json.dumps([
            {"name": "Gelato Tasting", "cost": 10, "category": "Dining",
             "location": "Rome, Italy", "durationHours": 1}
        ])
        planner = ItineraryPlanner(llm_client=mock_llm)

        self.assertEqual(run_scenarios(planner), 0)
        self.assertEqual(mock_llm.generate.call_count, 5)
        mock_llm.check_health.assert_called_once()
        self.assertEqual(len(planner.store), 6)

    def test_llm_unreachable(self):
        mock_llm = Mock()
        mock_llm.check_health.return_value = False
        planner = ItineraryPlanner(llm_client=mock_llm)

        self.assertEqual(run_scenarios(planner), 1)
        mock_llm.generate.assert_not_called()

    @patch('main.setup_logging')
    def test_main_offline(self, mock_setup_logging):
        self.assertEqual(main(["--offline"]), 0)
        mock_setup_logging.assert_called_once()

if __name__ == '__main__':
    unittest.main()
