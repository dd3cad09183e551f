"""
Boundary Conditions Data Model
==============================
Defines the convective (Robin) condition applied on each face of the slab.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, Any
import logging
import math
import numbers

from slabtemperature.exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)


def _finite_real(value: Any) -> bool:
    return not isinstance(value, bool) and isinstance(value, numbers.Real) and math.isfinite(value)


class SlabFace(StrEnum):
    HOT = "hot"
    COLD = "cold"


@dataclass(frozen=True)
class ConvectiveBoundary:
    """
    Convective heat exchange between a slab face and its surroundings.

    Attributes:
        coefficient: Heat transfer coefficient α in W/m²K, must be positive.
        ambient_temperature: Temperature of the surrounding medium.
    """
    coefficient: float
    ambient_temperature: float

    def validate(self, face: SlabFace) -> None:
        if not _finite_real(self.coefficient) or self.coefficient <= 0.0:
            raise InvalidConfiguration(
                f"Convective coefficient on the {face} face must be a positive finite number, "
                f"got {self.coefficient!r}."
            )
        if not _finite_real(self.ambient_temperature):
            raise InvalidConfiguration(
                f"Ambient temperature on the {face} face must be finite, got {self.ambient_temperature!r}."
            )

    def to_dict(self) -> Dict[str, Any]:
        return {"coefficient": self.coefficient, "ambient_temperature": self.ambient_temperature}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ConvectiveBoundary:
        try:
            return ConvectiveBoundary(
                coefficient=float(data["coefficient"]),
                ambient_temperature=float(data["ambient_temperature"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfiguration(f"Invalid boundary definition {data!r}: {e}") from e
