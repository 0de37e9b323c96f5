"""
Program parameter table for the 3SquaresVT eligibility calculator.

The maintaining organization updates these figures when the state publishes
new numbers (each federal fiscal year). Only the values change; the formulas
in this package stay the same. If the methods change, the calculators need to
be revised and revalidated.

Tables are read from JSON using the key layout of the published calculator
(``StandardDeduction``, ``ExpandedGrossMonthlyIncome``, ``MaximumBenefit``, ...)
or from YAML with the same keys.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

PARAMETERS_ENV_VAR = "SNAP_ELIGIBILITY_PARAMETERS"
DEFAULT_PARAMETERS_PATH = Path(__file__).parent / "data" / "vermont.json"

_PARAMETERS_CACHE: Optional["ProgramParameters"] = None


class ParameterError(ValueError):
    """Raised when a parameter table is malformed or violates its invariants."""


class UtilityTier(str, Enum):
    """Standard utility allowance tiers."""

    WITH_HEAT = "with_heat"
    WITHOUT_HEAT = "without_heat"
    PHONE_ONLY = "phone_only"


# Published key -> tier
_UTILITY_KEYS = {
    "WithHeat": UtilityTier.WITH_HEAT,
    "WithoutHeat": UtilityTier.WITHOUT_HEAT,
    "PhoneOnly": UtilityTier.PHONE_ONLY,
}


@dataclass(frozen=True)
class TieredTable:
    """Amounts keyed by household size, extended past the largest tier."""

    values: Mapping[int, float]
    additional: float = 0.0  # per member beyond the largest tier

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @property
    def max_size(self) -> int:
        return max(self.values)

    def lookup(self, household_size: int) -> float:
        """
        Look up the amount for a household size.

        Sizes up to the largest tier read the table directly. Larger
        households get the largest tier plus ``additional`` per extra member,
        so a table with ``additional=0`` is capped at its largest tier.
        """
        if household_size < 1:
            raise ValueError(f"household size must be at least 1, got {household_size}")
        top = self.max_size
        if household_size <= top:
            return self.values[household_size]
        return self.values[top] + (household_size - top) * self.additional

    def to_dict(self) -> dict[str, float]:
        out = {str(k): v for k, v in sorted(self.values.items())}
        if self.additional:
            out["Additional"] = self.additional
        return out


@dataclass(frozen=True)
class ProgramParameters:
    """Immutable, versioned set of figures the formulas are evaluated against."""

    standard_deduction: TieredTable
    gross_income_limit: TieredTable
    medical_standard_deduction: float
    maximum_benefit: TieredTable
    utility_standard: Mapping[UtilityTier, float]
    shelter_deduction_cap: float = 504.0
    earned_income_disregard: float = 0.2
    benefit_reduction_rate: float = 0.3
    medical_expense_threshold: float = 35.0
    medical_standard_ceiling: float = 173.0
    version: str = ""
    source: str = ""
    extras: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "utility_standard", MappingProxyType(dict(self.utility_standard)))
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))
        self._check_invariants()

    def _check_invariants(self) -> None:
        dense = (
            ("StandardDeduction", self.standard_deduction, 6),
            ("ExpandedGrossMonthlyIncome", self.gross_income_limit, 10),
            ("MaximumBenefit", self.maximum_benefit, 10),
        )
        for name, table, min_size in dense:
            # Dense from 1 through the largest tier
            top = max([min_size, *table.values])
            missing = [n for n in range(1, top + 1) if n not in table.values]
            if missing:
                raise ParameterError(f"{name} is missing household sizes {missing}")
            negative = [n for n, v in table.values.items() if v < 0]
            if negative or table.additional < 0:
                raise ParameterError(f"{name} contains negative amounts")

        missing_tiers = [t.value for t in UtilityTier if t not in self.utility_standard]
        if missing_tiers:
            raise ParameterError(f"UtilityStandard is missing tiers {missing_tiers}")

        scalars = {
            "MedicalStandardDeduction": self.medical_standard_deduction,
            "shelter_deduction_cap": self.shelter_deduction_cap,
            "medical_expense_threshold": self.medical_expense_threshold,
            "medical_standard_ceiling": self.medical_standard_ceiling,
        }
        scalars.update({f"UtilityStandard.{t.value}": v for t, v in self.utility_standard.items()})
        for name, value in scalars.items():
            if value < 0:
                raise ParameterError(f"{name} cannot be negative ({value})")

        for name in ("earned_income_disregard", "benefit_reduction_rate"):
            rate = getattr(self, name)
            if not 0 <= rate <= 1:
                raise ParameterError(f"{name} must be between 0 and 1 ({rate})")

        if self.medical_expense_threshold > self.medical_standard_ceiling:
            raise ParameterError("medical_expense_threshold exceeds medical_standard_ceiling")

    def standard_deduction_for(self, household_size: int) -> float:
        """Standard deduction, capped at the largest (size-6) tier."""
        return self.standard_deduction.lookup(household_size)

    def gross_income_limit_for(self, household_size: int) -> float:
        """Gross monthly income limit, with a per-member increment past 10."""
        return self.gross_income_limit.lookup(household_size)

    def maximum_benefit_for(self, household_size: int) -> float:
        """Maximum monthly allotment, with a per-member increment past 10."""
        return self.maximum_benefit.lookup(household_size)

    def utility_allowance(self, tier: UtilityTier = UtilityTier.WITH_HEAT) -> float:
        return self.utility_standard[UtilityTier(tier)]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProgramParameters":
        """
        Build parameters from a published-layout mapping.

        Args:
            data: Mapping with ``StandardDeduction``, ``ExpandedGrossMonthlyIncome``,
                ``MedicalStandardDeduction``, ``MaximumBenefit`` and
                ``UtilityStandard`` keys. Optional snake_case keys override the
                formula constants (``shelter_deduction_cap`` and friends).

        Returns:
            ProgramParameters

        Raises:
            ParameterError: if a key is missing, a value is not numeric, or an
                invariant does not hold.
        """
        if not isinstance(data, dict):
            raise ParameterError("parameter table must be a mapping")

        utilities = _require(data, "UtilityStandard")
        if not isinstance(utilities, dict):
            raise ParameterError("UtilityStandard must be a mapping")
        utility_standard = {}
        for key, value in utilities.items():
            tier = _UTILITY_KEYS.get(key)
            if tier is None:
                try:
                    tier = UtilityTier(key)
                except ValueError:
                    raise ParameterError(f"unknown utility tier {key!r}") from None
            utility_standard[tier] = _number(value, f"UtilityStandard.{key}")

        known = {
            "StandardDeduction",
            "ExpandedGrossMonthlyIncome",
            "MedicalStandardDeduction",
            "MaximumBenefit",
            "UtilityStandard",
            "version",
            "source",
        }
        constants = {}
        for name in (
            "shelter_deduction_cap",
            "earned_income_disregard",
            "benefit_reduction_rate",
            "medical_expense_threshold",
            "medical_standard_ceiling",
        ):
            known.add(name)
            if name in data:
                constants[name] = _number(data[name], name)

        return cls(
            standard_deduction=_table(data, "StandardDeduction"),
            gross_income_limit=_table(data, "ExpandedGrossMonthlyIncome"),
            medical_standard_deduction=_number(
                _require(data, "MedicalStandardDeduction"), "MedicalStandardDeduction"
            ),
            maximum_benefit=_table(data, "MaximumBenefit"),
            utility_standard=utility_standard,
            version=str(data.get("version", "")),
            source=str(data.get("source", "")),
            extras={k: v for k, v in data.items() if k not in known},
            **constants,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the published key layout."""
        reverse = {tier: key for key, tier in _UTILITY_KEYS.items()}
        return {
            "version": self.version,
            "source": self.source,
            "StandardDeduction": self.standard_deduction.to_dict(),
            "ExpandedGrossMonthlyIncome": self.gross_income_limit.to_dict(),
            "MedicalStandardDeduction": self.medical_standard_deduction,
            "MaximumBenefit": self.maximum_benefit.to_dict(),
            "UtilityStandard": {
                reverse[t]: v for t, v in sorted(self.utility_standard.items(), key=lambda i: i[0].value)
            },
            "shelter_deduction_cap": self.shelter_deduction_cap,
            "earned_income_disregard": self.earned_income_disregard,
            "benefit_reduction_rate": self.benefit_reduction_rate,
            "medical_expense_threshold": self.medical_expense_threshold,
            "medical_standard_ceiling": self.medical_standard_ceiling,
        }


def _require(data: dict, key: str) -> Any:
    if key not in data:
        raise ParameterError(f"parameter table is missing {key!r}")
    return data[key]


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ParameterError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ParameterError(f"{name} must be a number, got {value!r}") from None


def _table(data: dict, key: str) -> TieredTable:
    raw = _require(data, key)
    if not isinstance(raw, dict):
        raise ParameterError(f"{key} must be a mapping of household size to amount")
    values = {}
    additional = 0.0
    for size, amount in raw.items():
        if str(size) == "Additional":
            additional = _number(amount, f"{key}.Additional")
            continue
        try:
            n = int(size)
        except (TypeError, ValueError):
            raise ParameterError(f"{key} has a non-integer household size {size!r}") from None
        values[n] = _number(amount, f"{key}.{size}")
    if not values:
        raise ParameterError(f"{key} is empty")
    return TieredTable(values=values, additional=additional)


def load_parameters(path: Optional[Union[str, Path]] = None) -> ProgramParameters:
    """
    Load a parameter table from disk.

    Args:
        path: JSON or YAML file. Defaults to ``$SNAP_ELIGIBILITY_PARAMETERS``
            if set, otherwise the bundled Vermont table.

    Returns:
        ProgramParameters
    """
    if path is None:
        path = os.environ.get(PARAMETERS_ENV_VAR) or DEFAULT_PARAMETERS_PATH
    path = Path(path)

    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ParameterError(f"could not parse {path}: {e}") from e

    params = ProgramParameters.from_dict(data)
    logger.info("Loaded program parameters %s from %s", params.version or "(unversioned)", path)
    return params


def get_parameters() -> ProgramParameters:
    """Return the active parameter table, loading it on first use."""
    global _PARAMETERS_CACHE
    if _PARAMETERS_CACHE is None:
        _PARAMETERS_CACHE = load_parameters()
    return _PARAMETERS_CACHE


def reset_parameters() -> None:
    """Drop the cached table so the next ``get_parameters`` reloads it."""
    global _PARAMETERS_CACHE
    _PARAMETERS_CACHE = None
