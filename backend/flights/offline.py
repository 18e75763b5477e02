"""
Offline sample response, served when the provider is unreachable and the
offline fallback is switched on (or when FLIGHTS_PROVIDER is "offline").

It is a raw provider response, not pre-formatted offers, so it runs through
the same extraction and formatting path as live data.
"""
import copy

OFFLINE_SEARCH_RESPONSE = {
    "success": True,
    "data": {
        "data": {
            "traceId": "offline-sample",
            "results": [
                [
                    {
                        "ResultIndex": "OB1[TBO]offline-sample-6E983",
                        "ResultFareType": "RegularFare",
                        "AirlineCode": "6E",
                        "IsLCC": True,
                        "IsRefundable": True,
                        "AirlineRemark": "This option is for travel from HDO.",
                        "FareInclusions": [
                            "Cabin Baggage - 07KG",
                            "Check-In baggage - 15KG",
                            "Cancellation fees - Applicable",
                            "Reissue fees - Applicable",
                            "Seat - Chargeable",
                            "Meal - Chargeable",
                        ],
                        "Fare": {
                            "Currency": "INR",
                            "BaseFare": 4278,
                            "Tax": 819,
                            "PublishedFare": 5097,
                            "OfferedFare": 5077.71,
                        },
                        "Segments": [
                            [
                                {
                                    "Baggage": "15 Kilograms",
                                    "CabinBaggage": "7 KG",
                                    "CabinClass": 2,
                                    "SupplierFareClass": "Tactical",
                                    "TripIndicator": 1,
                                    "SegmentIndicator": 1,
                                    "Airline": {
                                        "AirlineCode": "6E",
                                        "AirlineName": "Indigo",
                                        "FlightNumber": "983",
                                        "FareClass": "RT",
                                        "OperatingCarrier": "",
                                    },
                                    "NoOfSeatAvailable": 7,
                                    "Origin": {
                                        "Airport": {
                                            "AirportCode": "HDO",
                                            "AirportName": "Hindon Airport",
                                            "Terminal": "",
                                            "CityCode": "HDO",
                                            "CityName": "Ghaziabad",
                                            "CountryCode": "IN",
                                            "CountryName": "India",
                                        },
                                        "DepTime": "2025-11-18T11:45:00",
                                    },
                                    "Destination": {
                                        "Airport": {
                                            "AirportCode": "BOM",
                                            "AirportName": "Chhatrapati Shivaji Maharaj International Airport",
                                            "Terminal": "2",
                                            "CityCode": "BOM",
                                            "CityName": "Mumbai",
                                            "CountryCode": "IN",
                                            "CountryName": "India",
                                        },
                                        "ArrTime": "2025-11-18T14:00:00",
                                    },
                                    "Duration": 135,
                                    "GroundTime": 0,
                                    "StopOver": False,
                                    "StopPoint": "",
                                    "Craft": "320",
                                    "IsETicketEligible": True,
                                    "FlightStatus": "Confirmed",
                                }
                            ]
                        ],
                    }
                ]
            ],
        }
    },
}


def offline_search_response() -> dict:
    # Callers get their own copy; the module constant stays pristine.
    return copy.deepcopy(OFFLINE_SEARCH_RESPONSE)
