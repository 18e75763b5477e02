def make_segment(origin="DEL", destination="BOM", dep="2025-11-18T06:00:00", arr="2025-11-18T08:10:00", **extra):
    segment = {
        "Airline": {"AirlineCode": "AI", "AirlineName": "Air India", "FlightNumber": "865"},
        "Origin": {"Airport": {"AirportCode": origin, "CityName": "Delhi", "AirportName": "Indira Gandhi", "Terminal": "3"}, "DepTime": dep},
        "Destination": {"Airport": {"AirportCode": destination, "CityName": "Mumbai", "AirportName": "CSMIA", "Terminal": "2"}, "ArrTime": arr},
        "Duration": 130,
        "Craft": "32N",
        "Baggage": "25 Kilograms",
        "CabinClass": 2,
        "SupplierFareClass": "Saver",
    }
    segment.update(extra)
    return segment


def make_envelope(result_index="OB1", segments=None, **extra):
    envelope = {
        "ResultIndex": result_index,
        "IsRefundable": False,
        "ResultFareType": "RegularFare",
        "Fare": {"Currency": "INR", "BaseFare": 5000, "Tax": 700, "PublishedFare": 5700},
        "Segments": [[make_segment()]] if segments is None else segments,
    }
    envelope.update(extra)
    return envelope


def wrap_results(*envelopes):
    return {"data": {"data": {"results": list(envelopes)}}}
