from rest_framework import serializers


class FlightSearchSerializer(serializers.Serializer):
    origin = serializers.CharField(min_length=3, max_length=8)
    destination = serializers.CharField(min_length=3, max_length=8)
    departureDate = serializers.DateField()
    returnDate = serializers.DateField(required=False, allow_null=True)
    tripType = serializers.ChoiceField(choices=["oneway", "roundtrip"], required=False, default="oneway")
    adults = serializers.IntegerField(min_value=1, max_value=9, required=False, default=1)
    children = serializers.IntegerField(min_value=0, max_value=9, required=False, default=0)
    infants = serializers.IntegerField(min_value=0, max_value=9, required=False, default=0)

    # Free text: unknown classes fall back to Economy in the provider request.
    cabinClass = serializers.CharField(required=False, default="Economy")

    currency = serializers.CharField(required=False, allow_null=True, min_length=3, max_length=3)
    directFlight = serializers.BooleanField(required=False, default=False)
    preferredAirlines = serializers.ListField(
        child=serializers.CharField(min_length=2, max_length=3),
        required=False,
        default=list,
    )

    def validate_preferredAirlines(self, value):
        return [code.strip().upper() for code in value]

    def validate(self, attrs):
        for field in ("origin", "destination"):
            attrs[field] = attrs[field].strip().upper()
        if attrs["origin"] == attrs["destination"]:
            raise serializers.ValidationError({"destination": "Destination must be different from origin."})

        currency = (attrs.get("currency") or "").strip().upper()
        attrs["currency"] = currency or None

        if attrs["tripType"] != "roundtrip":
            attrs["returnDate"] = None
        elif not attrs.get("returnDate"):
            raise serializers.ValidationError({"returnDate": "Return date is required for a round trip."})
        elif attrs["returnDate"] < attrs["departureDate"]:
            raise serializers.ValidationError({"returnDate": "Return date must be on or after departure date."})

        return attrs
