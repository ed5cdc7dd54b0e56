"""Facility registry seeded at startup."""

from collections.abc import Iterable, Iterator

from h2telemetry.domain.errors import FacilityNotFoundError
from h2telemetry.domain.models import FacilityArchetype, FacilityProfile

DEFAULT_FACILITIES: tuple[FacilityProfile, ...] = (
    FacilityProfile(
        id=1,
        name="GreenTech Mumbai",
        archetype=FacilityArchetype.SOLAR_HEAVY,
        base_intensity=0.5,
        renewable_fraction=0.8,
    ),
    FacilityProfile(
        id=2,
        name="CleanEnergy Gujarat",
        archetype=FacilityArchetype.WIND_HEAVY,
        base_intensity=0.3,
        renewable_fraction=0.9,
    ),
    FacilityProfile(
        id=3,
        name="HydroCorp Chennai",
        archetype=FacilityArchetype.MIXED_ENERGY,
        base_intensity=1.2,
        renewable_fraction=0.6,
    ),
    FacilityProfile(
        id=4,
        name="EcoFuel Industries",
        archetype=FacilityArchetype.GRID_DEPENDENT,
        base_intensity=2.5,
        renewable_fraction=0.3,
    ),
    FacilityProfile(
        id=5,
        name="SolarTech Bangalore",
        archetype=FacilityArchetype.SOLAR_HEAVY,
        base_intensity=0.4,
        renewable_fraction=0.85,
    ),
)


class FacilityRegistry:
    """Immutable, ordered lookup of facility profiles by id."""

    def __init__(self, facilities: Iterable[FacilityProfile] | None = None) -> None:
        """Initialize the registry.

        Args:
            facilities: Profiles to register. Defaults to the five demo sites.

        Raises:
            ValueError: If two profiles share an id.
        """
        profiles = tuple(DEFAULT_FACILITIES if facilities is None else facilities)
        self._by_id: dict[int, FacilityProfile] = {}
        for profile in profiles:
            if profile.id in self._by_id:
                raise ValueError(f"Duplicate facility id {profile.id}")
            self._by_id[profile.id] = profile

    def get(self, facility_id: int) -> FacilityProfile:
        """Look up a facility, raising FacilityNotFoundError if unknown."""
        try:
            return self._by_id[facility_id]
        except KeyError:
            raise FacilityNotFoundError(facility_id) from None

    def __contains__(self, facility_id: object) -> bool:
        return facility_id in self._by_id

    def __iter__(self) -> Iterator[FacilityProfile]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    @property
    def ids(self) -> list[int]:
        return list(self._by_id)
