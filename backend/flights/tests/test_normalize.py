from dataclasses import fields, is_dataclass
from unittest.mock import patch

from django.test import SimpleTestCase

from flights.domain import SearchContext
from flights.services.normalize import format_duration, format_offer
from flights.services.segments import is_valid_segment
from flights.tests.fixtures import make_envelope, make_segment

CONTEXT = SearchContext(origin="DEL", destination="BOM", departure_date="2025-11-18")


def _assert_no_none(testcase, obj):
    for f in fields(obj):
        value = getattr(obj, f.name)
        testcase.assertIsNotNone(value, f.name)
        if is_dataclass(value):
            _assert_no_none(testcase, value)


class FormatOfferTests(SimpleTestCase):
    def test_maps_full_record(self):
        offer = format_offer(make_envelope(), make_segment(), CONTEXT)

        self.assertEqual(offer.id, "OB1")
        self.assertEqual(offer.airline.code, "AI")
        self.assertEqual(offer.airline.name, "Air India")
        self.assertEqual(offer.airline.number, "865")
        self.assertEqual(offer.airline.logo_url, "https://www.gstatic.com/flights/airline_logos/70px/ai.png")
        self.assertEqual(offer.origin, "DEL")
        self.assertEqual(offer.origin_info.city, "Delhi")
        self.assertEqual(offer.destination_info.terminal, "2")
        self.assertEqual(offer.departure_time, "2025-11-18T06:00:00")
        self.assertEqual(offer.arrival_time, "2025-11-18T08:10:00")
        self.assertEqual(offer.duration, "2h 10m")
        self.assertEqual(offer.duration_in_minutes, 130)
        self.assertEqual(offer.aircraft_type, "32N")
        self.assertEqual(offer.fare.total_fare, 5700)
        self.assertEqual(offer.fare.currency, "INR")
        self.assertEqual(offer.cabin_class, "Economy")
        self.assertEqual(offer.booking_class, "Saver")
        self.assertEqual(offer.fare_type, "RegularFare")
        self.assertEqual(offer.baggage, "25 Kilograms")

    def test_departure_time_candidate_order(self):
        segment = make_segment()
        segment["Origin"] = {"AirportCode": "DEL", "DepTime": "T1", "DepartureTime": "T2"}
        self.assertEqual(format_offer(make_envelope(), segment, CONTEXT).departure_time, "T1")

        segment["Origin"] = {"AirportCode": "DEL", "DepartureTime": "T2", "DepartureDateTime": "T3"}
        self.assertEqual(format_offer(make_envelope(), segment, CONTEXT).departure_time, "T2")

    def test_flat_airport_codes_and_context_fallback(self):
        segment = {
            "Origin": {"AirportCode": "del", "DepTime": "T1"},
            "Destination": {"ArrivalDateTime": "T9"},
        }
        offer = format_offer(make_envelope(), segment, CONTEXT)
        self.assertEqual(offer.origin, "DEL")
        self.assertEqual(offer.destination, "BOM")
        self.assertEqual(offer.arrival_time, "T9")

    def test_every_valid_endpoint_shape_resolves_its_own_code(self):
        shapes = [
            "JFK",
            {"Airport": {"AirportCode": "JFK"}},
            {"AirportCode": "JFK"},
            {"Airport": {"CityCode": "JFK"}},
            {"CityCode": "JFK"},
        ]
        for shape in shapes:
            with self.subTest(shape=shape):
                segment = {"Origin": shape, "Destination": {"AirportCode": "LHR", "ArrTime": "T2"}}
                self.assertTrue(is_valid_segment(segment))
                offer = format_offer(make_envelope(), segment, CONTEXT)
                self.assertEqual(offer.origin, "JFK")
                self.assertEqual(offer.origin_info.code, "JFK")
                self.assertEqual(offer.destination, "LHR")

    def test_rejects_context_of_wrong_type(self):
        with self.assertRaises(TypeError):
            format_offer(make_envelope(), make_segment(), {"origin": "DEL"})

    def test_defaults_cover_every_field(self):
        segment = {"Origin": {"AirportCode": "DEL", "DepTime": "T1"}}
        offer = format_offer({"Fare": {}}, segment, None)

        _assert_no_none(self, offer)
        self.assertEqual(offer.airline.name, "Unknown Airline")
        self.assertEqual(offer.airline.logo_url, "")
        self.assertEqual(offer.destination, "")
        self.assertEqual(offer.arrival_time, "")
        self.assertEqual(offer.duration, "")
        self.assertEqual(offer.duration_in_minutes, 0)
        self.assertEqual(offer.stops, 0)
        self.assertEqual(offer.aircraft_type, "N/A")
        self.assertEqual(offer.baggage, "Check Fare Rules")
        self.assertEqual(offer.fare.total_fare, 0)
        self.assertFalse(offer.fare.refundable)
        self.assertFalse(offer.amenities.wifi)
        self.assertFalse(offer.amenities.meals)
        self.assertFalse(offer.amenities.entertainment)

    def test_id_falls_back_to_airline_and_timestamp(self):
        envelope = make_envelope()
        del envelope["ResultIndex"]
        with patch("flights.services.normalize.time.time", return_value=1700000000.5):
            offer = format_offer(envelope, make_segment(), CONTEXT)
        self.assertEqual(offer.id, "AI-1700000000500")

    def test_total_fare_derived_when_missing(self):
        envelope = make_envelope(Fare={"BaseFare": "4,278", "Tax": 819, "Currency": "INR"})
        offer = format_offer(envelope, make_segment(), CONTEXT)
        self.assertEqual(offer.fare.base_fare, 4278)
        self.assertEqual(offer.fare.total_fare, 5097)

    def test_stops_and_aircraft_candidates(self):
        segment = make_segment(StopQuantity=2, Equipment="738")
        del segment["Craft"]
        offer = format_offer(make_envelope(), segment, CONTEXT)
        self.assertEqual(offer.stops, 2)
        self.assertEqual(offer.aircraft_type, "738")

    def test_baggage_falls_back_to_envelope_fare(self):
        segment = make_segment()
        del segment["Baggage"]
        envelope = make_envelope()
        envelope["Fare"]["ChargeableBaggage"] = "20 KG"
        self.assertEqual(format_offer(envelope, segment, CONTEXT).baggage, "20 KG")

    def test_amenities_read_when_supplied(self):
        segment = make_segment(Amenities={"Wifi": True, "meals": "yes"})
        offer = format_offer(make_envelope(), segment, CONTEXT)
        self.assertTrue(offer.amenities.wifi)
        self.assertTrue(offer.amenities.meals)
        self.assertFalse(offer.amenities.entertainment)

    def test_returns_none_for_missing_inputs(self):
        self.assertIsNone(format_offer(None, make_segment(), CONTEXT))
        self.assertIsNone(format_offer(make_envelope(), None, CONTEXT))
        self.assertIsNone(format_offer(make_envelope(), {}, CONTEXT))

    def test_returns_none_without_route_or_schedule(self):
        no_route = {"Origin": {"DepTime": "T1"}, "Destination": {"ArrTime": "T2"}}
        self.assertIsNone(format_offer(make_envelope(), no_route, None))

        no_times = {"Origin": {"AirportCode": "DEL"}, "Destination": {"AirportCode": "BOM"}}
        self.assertIsNone(format_offer(make_envelope(), no_times, CONTEXT))

    def test_unexpected_error_is_logged_and_swallowed(self):
        with patch("flights.services.normalize._fare", side_effect=KeyError("Fare")):
            with self.assertLogs("flights.services.normalize", level="ERROR"):
                self.assertIsNone(format_offer(make_envelope(), make_segment(), CONTEXT))

    def test_deterministic_output(self):
        first = format_offer(make_envelope(), make_segment(), CONTEXT)
        second = format_offer(make_envelope(), make_segment(), CONTEXT)
        self.assertEqual(first, second)
        self.assertEqual(first.to_dict(), second.to_dict())


class FormatDurationTests(SimpleTestCase):
    def test_formats_hours_and_minutes(self):
        self.assertEqual(format_duration(135), "2h 15m")
        self.assertEqual(format_duration(59), "0h 59m")
        self.assertEqual(format_duration(0), "")
