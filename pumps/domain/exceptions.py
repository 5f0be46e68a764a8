class PumpError(Exception):
    """Base class for every business rule violation raised by the registry."""

    code = "pump_error"


class PumpNotFound(PumpError):
    """Raised when an identifier does not resolve to a stored pump."""

    code = "not_found"

    def __init__(self, pump_id):
        self.pump_id = pump_id
        super().__init__(f"Fuel Pump with ID={pump_id} not found.")


class InvalidInput(PumpError):
    """Raised when a required field is missing, falsy or malformed."""

    code = "invalid_input"

    def __init__(self, message, field=None):
        self.field = field
        super().__init__(message)


class InvalidState(PumpError):
    """Raised when the pump's status does not allow the requested operation."""

    code = "invalid_state"

    def __init__(self, pump_id, status):
        self.pump_id = pump_id
        self.status = status
        super().__init__(
            f"Fuel Pump {pump_id} is {status.value} and cannot dispense fuel."
        )


class InsufficientQuantity(PumpError):
    """Raised when a dispense would drive the pump's fuel quantity negative."""

    code = "insufficient_quantity"

    def __init__(self, pump_id, requested, available):
        self.pump_id = pump_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Fuel Pump {pump_id}: requested {requested}, available {available}"
        )


class StorageError(PumpError):
    """Raised when the underlying store rejects a read or a write."""

    code = "storage_error"
