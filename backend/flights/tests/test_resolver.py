from django.test import SimpleTestCase

from flights.services.resolver import resolve


class ResolveTests(SimpleTestCase):
    def test_first_present_candidate_wins(self):
        record = {"Origin": {"DepTime": "T1", "DepartureTime": "T2"}}
        self.assertEqual(resolve(record, ["Origin.DepTime", "Origin.DepartureTime"]), "T1")

    def test_skips_none_and_empty_string(self):
        record = {"a": None, "b": "", "c": "value"}
        self.assertEqual(resolve(record, ["a", "b", "c"]), "value")

    def test_keeps_falsy_non_blank_values(self):
        record = {"stops": 0, "refundable": False}
        self.assertEqual(resolve(record, ["stops"], 9), 0)
        self.assertIs(resolve(record, ["refundable"], True), False)

    def test_missing_intermediate_returns_fallback(self):
        record = {"Origin": "HDO"}
        self.assertEqual(resolve(record, ["Origin.Airport.AirportCode", "Missing.Key"], "n/a"), "n/a")

    def test_walks_list_indexes(self):
        record = {"Segments": [[{"Craft": "320"}]]}
        self.assertEqual(resolve(record, ["Segments.0.0.Craft"]), "320")
        self.assertIsNone(resolve(record, ["Segments.5.0.Craft"]))

    def test_non_mapping_record(self):
        self.assertEqual(resolve(None, ["a.b"], "x"), "x")
        self.assertEqual(resolve("text", ["0"], "x"), "x")
