"""
API Layer — Fuel Pump Endpoints (Django REST Framework)

The views are thin controllers. Their responsibilities are limited to:

- Pulling arguments out of the URL and request body
- Delegating to FuelPumpRegistry
- Serializing the returned entities
- Translating domain exceptions into HTTP responses

No business rules live here. Validation, status and quantity guards, and
locking all belong to the registry, so every endpoint answers with either a
serialized result or {"error": ..., "code": ...}.
"""

from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.response import Response
from rest_framework.views import APIView, exception_handler

from pumps.dependencies import build_registry
from pumps.domain.exceptions import (
    InsufficientQuantity,
    InvalidInput,
    InvalidState,
    PumpError,
    PumpNotFound,
    StorageError,
)
from pumps.serializers import FuelPumpSerializer, TransactionSerializer

ERROR_STATUS = {
    PumpNotFound: status.HTTP_404_NOT_FOUND,
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    InvalidState: status.HTTP_409_CONFLICT,
    InsufficientQuantity: status.HTTP_422_UNPROCESSABLE_ENTITY,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(exc):
    return Response(
        {"error": str(exc), "code": exc.code},
        status=ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
    )


def api_exception_handler(exc, context):
    """Gives DRF's own errors (bad JSON, failed auth) the {"error", "code"} shape."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, (ParseError, UnsupportedMediaType)):
        code = InvalidInput.code
    else:
        code = getattr(exc, "default_code", "error")
    detail = getattr(exc, "detail", str(exc))
    response.data = {"error": str(detail), "code": code}
    return response


def body_field(request, name):
    data = request.data
    return data.get(name) if hasattr(data, "get") else None


def pump_response(pump, status_code=status.HTTP_200_OK):
    return Response(FuelPumpSerializer(pump).data, status=status_code)


class FuelPumpListView(APIView):
    """
    GET  /api/pumps/  -> every pump
    POST /api/pumps/  -> register a pump
    """

    def get(self, request):
        try:
            pumps = build_registry(request).list_all()
        except PumpError as exc:
            return error_response(exc)
        return Response(FuelPumpSerializer(pumps, many=True).data)

    def post(self, request):
        try:
            pump = build_registry(request).create(request.data)
        except PumpError as exc:
            return error_response(exc)
        return pump_response(pump, status.HTTP_201_CREATED)


class FuelPumpDetailView(APIView):
    """GET, PUT and DELETE /api/pumps/<pump_id>/"""

    def get(self, request, pump_id):
        try:
            pump = build_registry(request).get(pump_id)
        except PumpError as exc:
            return error_response(exc)
        return pump_response(pump)

    def put(self, request, pump_id):
        try:
            pump = build_registry(request).update(pump_id, request.data)
        except PumpError as exc:
            return error_response(exc)
        return pump_response(pump)

    def delete(self, request, pump_id):
        try:
            pump = build_registry(request).delete(pump_id)
        except PumpError as exc:
            return error_response(exc)
        return pump_response(pump)


class DispenseFuelView(APIView):
    """POST /api/pumps/<pump_id>/dispense/ with {"quantity": ...}"""

    def post(self, request, pump_id):
        try:
            pump = build_registry(request).dispense(pump_id, body_field(request, "quantity"))
        except PumpError as exc:
            return error_response(exc)
        return pump_response(pump)


class PumpTransactionsView(APIView):
    def get(self, request, pump_id):
        try:
            transactions = build_registry(request).list_transactions(pump_id)
        except PumpError as exc:
            return error_response(exc)
        return Response(TransactionSerializer(transactions, many=True).data)


class PumpStatusView(APIView):
    """PUT /api/pumps/<pump_id>/status/ with {"status": ...}"""

    def put(self, request, pump_id):
        try:
            pump = build_registry(request).set_status(pump_id, body_field(request, "status"))
        except PumpError as exc:
            return error_response(exc)
        return pump_response(pump)
