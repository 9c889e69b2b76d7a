"""
Configuration for the state-vector engine.
"""
from __future__ import annotations

from dataclasses import dataclass

KERNELS = frozenset({"direct", "insertion"})


def check_threshold(threshold: float, what: str = "print_threshold") -> float:
    if not threshold > 0:
        raise ValueError(f"{what} must be positive, got {threshold!r}")
    return threshold


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for a StateVectorEngine."""

    # Amplitudes with magnitude below this are left out of render()
    print_threshold: float = 1e-6

    # Kernel strategy per gate arity ("direct" or "insertion")
    one_qubit_kernel: str = "insertion"
    two_qubit_kernel: str = "direct"

    def __post_init__(self):
        check_threshold(self.print_threshold)
        for field_name in ("one_qubit_kernel", "two_qubit_kernel"):
            value = getattr(self, field_name)
            if value not in KERNELS:
                raise ValueError(
                    f"{field_name} must be one of {sorted(KERNELS)}, got {value!r}"
                )


# Default configuration instance
DEFAULT_CONFIG = EngineConfig()
