"""Scoring configuration model."""

import hashlib
import math
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional

from ..errors import InvalidConfiguration
from .stats import CANONICAL_ORDER, StatCategory


SYSTEM_OWNER = "system"

DEFAULT_MULTIPLIERS: Dict[StatCategory, float] = {
    StatCategory.POINTS: 1.0,
    StatCategory.REBOUNDS: 1.0,
    StatCategory.ASSISTS: 1.0,
    StatCategory.STEALS: 2.0,
    StatCategory.BLOCKS: 2.0,
    StatCategory.THREES: 1.0,
    StatCategory.TURNOVERS: -1.0,
}

# Boundary ranges accepted from users
POSITIVE_MULTIPLIER_RANGE = (0.0, 10.0)
TURNOVER_MULTIPLIER_RANGE = (-10.0, 0.0)


@dataclass(frozen=True)
class ScoringConfiguration:
    """A named set of per-category fantasy point multipliers."""

    id: str
    owner_id: str
    multipliers: Dict[StatCategory, float]
    is_default: bool = False
    name: str = ""
    version: int = 1

    # Populated from multipliers; never passed in
    _fingerprint: str = field(default="", init=False, repr=False, compare=False)

    def __post_init__(self):
        parsed = {}
        for key, value in self.multipliers.items():
            try:
                category = StatCategory.parse(key)
            except ValueError as e:
                raise InvalidConfiguration(f"Configuration {self.id}: {e}") from e
            parsed[category] = value
        object.__setattr__(self, "multipliers", parsed)
        object.__setattr__(self, "_fingerprint", self._compute_fingerprint())

    @classmethod
    def from_mapping(cls, data: Mapping) -> "ScoringConfiguration":
        """Build from a record shaped like the service layer's JSON.

        Accepts either a nested ``multipliers`` mapping or flat
        ``<category>Multiplier`` keys.
        """
        multipliers = dict(data.get("multipliers") or data.get("multipliersByCategory") or {})
        if not multipliers:
            for key, value in data.items():
                if key.endswith("Multiplier"):
                    multipliers[key[: -len("Multiplier")]] = value

        return cls(
            id=str(data["id"]),
            owner_id=str(data.get("owner_id", data.get("ownerId", SYSTEM_OWNER))),
            multipliers=multipliers,
            is_default=bool(data.get("is_default", data.get("isDefault", False))),
            name=str(data.get("name", "")),
            version=int(data.get("version", 1)),
        )

    @classmethod
    def system_default(cls) -> "ScoringConfiguration":
        return cls(
            id="system-default",
            owner_id=SYSTEM_OWNER,
            multipliers=dict(DEFAULT_MULTIPLIERS),
            is_default=True,
            name="Default Configuration",
        )

    def validate(self) -> None:
        """Every category must have a finite multiplier.

        Raises:
            InvalidConfiguration: on a missing or non-finite multiplier
        """
        for category in CANONICAL_ORDER:
            if category not in self.multipliers:
                raise InvalidConfiguration(
                    f"Configuration {self.id} is missing the {category.value} multiplier"
                )
            value = self.multipliers[category]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidConfiguration(
                    f"Configuration {self.id} has a non-finite {category.value} multiplier: {value!r}"
                )

    def validate_ranges(self) -> None:
        """Check user-facing bounds on top of :meth:`validate`."""
        self.validate()
        low, high = POSITIVE_MULTIPLIER_RANGE
        for category in CANONICAL_ORDER:
            value = self.multipliers[category]
            if category == StatCategory.TURNOVERS:
                t_low, t_high = TURNOVER_MULTIPLIER_RANGE
                if not t_low <= value <= t_high:
                    raise InvalidConfiguration(
                        f"Turnover multiplier must be between {t_low:g} and {t_high:g}"
                    )
            elif not low <= value <= high:
                raise InvalidConfiguration(
                    f"Positive stat multipliers must be between {low:g} and {high:g}"
                )

    def multiplier(self, category) -> float:
        return self.multipliers[StatCategory.parse(category)]

    def scaled(self, factor: float) -> "ScoringConfiguration":
        """Return a copy with every multiplier multiplied by ``factor``."""
        return replace(
            self,
            multipliers={c: v * factor for c, v in self.multipliers.items()},
            version=self.version + 1,
        )

    def with_multipliers(self, multipliers: Mapping, **changes) -> "ScoringConfiguration":
        merged = dict(self.multipliers)
        for key, value in multipliers.items():
            merged[StatCategory.parse(key)] = value
        return replace(self, multipliers=merged, version=self.version + 1, **changes)

    @property
    def fingerprint(self) -> str:
        """Stable identity of (id, version, multipliers) for memo keys."""
        return self._fingerprint

    def _compute_fingerprint(self) -> str:
        parts = [self.id, str(self.version)]
        for category in CANONICAL_ORDER:
            value = self.multipliers.get(category)
            parts.append(f"{category.value}={value!r}")
        return hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()[:16]

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "isDefault": self.is_default,
            "name": self.name,
            "version": self.version,
            "multipliersByCategory": {c.value: self.multipliers.get(c) for c in CANONICAL_ORDER},
        }

    def __hash__(self) -> int:
        return hash((self.id, self._fingerprint))


def resolve_config(config: Optional[ScoringConfiguration]) -> ScoringConfiguration:
    """Fall back to the system default when no configuration was resolved."""
    return config if config is not None else ScoringConfiguration.system_default()
