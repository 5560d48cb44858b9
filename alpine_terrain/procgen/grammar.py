"""
Parameter specifications for terrain generation.

This module defines:
- ParameterSpec: Validation and extraction of parameters
- ALPINE_PARAMETERS: Noise constants of the alpine height function
"""

from typing import Dict, Tuple, List, Optional


class ParameterSpec:
    """
    Specification for module parameters with validation and clamping.

    Each parameter has:
    - min_val: Minimum allowed value
    - max_val: Maximum allowed value
    - default: Default value if not specified
    """

    def __init__(
        self,
        params: Dict[str, Tuple[float, float, float]],
        integers: Optional[List[str]] = None
    ):
        """
        Initialize parameter specification.

        Args:
            params: Dict mapping param_name -> (min_val, max_val, default)
            integers: Names of parameters that must be whole numbers
        """
        self.params = params
        self.integers = set(integers or [])

    def check_names(self, values: Dict[str, float]):
        """Raise ValueError if values contains names this table doesn't know."""

        unknown = sorted(set(values) - set(self.params))
        if unknown:
            raise ValueError(
                f"Unknown parameters: {', '.join(unknown)} "
                f"(expected some of: {', '.join(self.get_param_names())})"
            )

    def validate(self, values: Dict[str, float]) -> bool:
        """Check if all required parameters are present and in valid ranges."""

        for param_name, (min_val, max_val, _) in self.params.items():
            if param_name not in values:
                return False

            value = values[param_name]
            if not (min_val <= value <= max_val):
                return False

        return True

    def extract_params(self, values: Optional[Dict[str, float]] = None) -> Dict[str, float]:
        """Extract parameters, clamping given values and filling in defaults."""

        values = values or {}
        self.check_names(values)

        result = {}
        for param_name, (min_val, max_val, default) in self.params.items():
            if param_name in values:
                value = values[param_name]
                # Clamp to valid range
                value = max(min_val, min(max_val, value))
            else:
                value = default

            if param_name in self.integers:
                value = int(round(value))
            result[param_name] = value

        return result

    def defaults(self) -> Dict[str, float]:
        """Default value for every parameter."""
        return self.extract_params({})

    def get_param_names(self) -> List[str]:
        """Get list of parameter names."""
        return list(self.params.keys())

    def get_param_ranges(self) -> Dict[str, Tuple[float, float]]:
        """Get parameter ranges (min, max) for each parameter."""
        return {name: (min_val, max_val) for name, (min_val, max_val, _) in self.params.items()}


def _layer(prefix: str, octaves: int, persistence: float, lacunarity: float, scale: float):
    return {
        f"{prefix}_octaves": (1, 8, octaves),
        f"{prefix}_persistence": (0.1, 0.9, persistence),
        f"{prefix}_lacunarity": (1.5, 3.0, lacunarity),
        f"{prefix}_scale": (0.05, 8.0, scale),
    }


LAYERS = ["base", "ridge", "large", "detail"]

ALPINE_PARAMETERS = ParameterSpec(
    {
        # Domain warp
        "warp_strength": (0.0, 2.0, 0.4),
        "warp_scale": (0.05, 4.0, 0.3),
        # Noise layers
        **_layer("base", 5, 0.5, 2.0, 1.5),
        **_layer("ridge", 5, 0.5, 2.2, 2.0),
        **_layer("large", 3, 0.4, 2.0, 0.4),
        **_layer("detail", 3, 0.4, 2.5, 4.0),
        "detail_frequency": (1.0, 16.0, 4.0),
        "detail_amplitude": (0.0, 0.5, 0.1),
        # Layer blending
        "base_damping": (0.0, 1.0, 0.6),
        "ridge_weight": (0.0, 2.0, 0.8),
        # Height shaping
        "peak_exponent": (0.5, 3.0, 1.3),
        "valley_threshold": (0.0, 1.0, 0.25),
        "valley_flatten": (0.0, 1.0, 0.7),
    },
    integers=[f"{layer}_octaves" for layer in LAYERS]
)
