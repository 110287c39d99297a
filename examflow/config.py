from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict


class ConfigurationError(ValueError):
    """Raised when scheduler inputs are malformed (not a scheduling outcome)."""


@dataclass
class OptimizationPreference:
    balance_across_days: bool = True
    minimize_days_used: bool = False
    minimize_rooms_used: bool = False
    place_difficult_early: bool = False
    place_difficult_late: bool = False


@dataclass
class RelaxationPolicy:
    allow_consecutive_slots: bool = False
    max_consecutive_violations: int = 0
    allow_three_per_day: bool = False
    max_three_per_day_violations: int = 0
    allow_capacity_overflow: bool = False
    max_capacity_overflow_percent: float = 10.0


@dataclass
class SchedulerConfig:
    num_days: int = 5
    slots_per_day: int = 3
    optimization: OptimizationPreference = field(default_factory=OptimizationPreference)
    relaxations: RelaxationPolicy = field(default_factory=RelaxationPolicy)

    @property
    def total_slots(self) -> int:
        return self.num_days * self.slots_per_day

    def validate(self) -> "SchedulerConfig":
        if self.num_days < 1:
            raise ConfigurationError(f"num_days must be >= 1, got {self.num_days}")
        if self.slots_per_day < 1:
            raise ConfigurationError(f"slots_per_day must be >= 1, got {self.slots_per_day}")
        r = self.relaxations
        if r.max_consecutive_violations < 0:
            raise ConfigurationError("max_consecutive_violations must be >= 0")
        if r.max_three_per_day_violations < 0:
            raise ConfigurationError("max_three_per_day_violations must be >= 0")
        if r.max_capacity_overflow_percent < 0:
            raise ConfigurationError("max_capacity_overflow_percent must be >= 0")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchedulerConfig":
        known = {"num_days", "slots_per_day", "optimization", "relaxations"}
        extra = set(data) - known
        if extra:
            raise ConfigurationError(f"Unknown config keys: {sorted(extra)}")
        return cls(
            num_days=int(data.get("num_days", 5)),
            slots_per_day=int(data.get("slots_per_day", 3)),
            optimization=_section(OptimizationPreference, data.get("optimization") or {}),
            relaxations=_section(RelaxationPolicy, data.get("relaxations") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _section(kind, values: Dict[str, Any]):
    names = {f.name for f in fields(kind)}
    unknown = set(values) - names
    if unknown:
        raise ConfigurationError(f"Unknown {kind.__name__} keys: {sorted(unknown)}")
    kwargs = {}
    for name, value in values.items():
        default = getattr(kind(), name)
        # stored flags may arrive as 0/1 integers
        if isinstance(default, bool):
            kwargs[name] = bool(value)
        elif isinstance(default, float):
            kwargs[name] = float(value)
        else:
            kwargs[name] = int(value)
    return kind(**kwargs)
