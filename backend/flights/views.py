from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from flights.domain import serialize_result
from flights.exceptions import ProviderError
from flights.providers import get_flight_provider
from flights.serializers import FlightSearchSerializer


class HealthView(APIView):
    def get(self, request):
        return Response({"status": "ok"})


class FlightSearchView(APIView):
    def post(self, request):
        serializer = FlightSearchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        params = serializer.validated_data

        search_params = {
            **params,
            "departureDate": params["departureDate"].isoformat(),
            "returnDate": params["returnDate"].isoformat() if params.get("returnDate") else None,
        }
        # Let the engine apply its configured default currency.
        if not search_params.get("currency"):
            search_params.pop("currency", None)

        try:
            provider = get_flight_provider()
            result = provider.search(search_params)
        except ProviderError as exc:
            payload = {"message": str(exc)}
            if exc.details:
                payload["details"] = exc.details
            return Response(payload, status=exc.status_code or status.HTTP_502_BAD_GATEWAY)

        return Response(serialize_result(result))
