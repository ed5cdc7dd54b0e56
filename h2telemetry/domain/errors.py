"""Exceptions raised by the telemetry engine."""


class FacilityNotFoundError(LookupError):
    """Raised when a facility id is not in the registry."""

    def __init__(self, facility_id: int) -> None:
        self.facility_id = facility_id
        super().__init__(f"Facility {facility_id} not found")
