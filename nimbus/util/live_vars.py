from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import contextmanager, nullcontext, suppress
from dataclasses import dataclass
from time import perf_counter
from typing import Any, NamedTuple

from nimbus.types import FloatRange

from .metrics import SampleWindow


class MetricSpec(NamedTuple):
    """Definition for a metric to register in batch."""

    name: str
    description: str
    num_samples: int = 100


@dataclass
class LiveVariable:
    """A value exposed to the parameter-editing panel.

    Writable variables with a ``value_range`` are rendered as sliders. Metrics
    are read-only summaries of a ``SampleWindow``.
    """

    name: str
    description: str
    getter: Callable[[], Any]
    setter: Callable[[Any], None] | None = None
    formatter: Callable[[Any], str] | None = None
    display_decimals: int | None = None
    samples: SampleWindow | None = None
    metric: bool = False
    value_range: FloatRange | None = None

    def get_value(self) -> Any:
        """Return the current value using the getter."""
        return self.getter()

    def set_value(self, value: Any) -> bool:
        """Set the variable if writable.

        Returns ``True`` if the variable was set, or ``False`` if read-only.
        """
        if self.setter is None:
            return False
        self.setter(value)
        return True

    def record_value(self, value: float) -> None:
        """Record a sample without setting the variable."""
        if self.samples is not None:
            self.samples.record(value)

    def format_value(self) -> str:
        """Render the current value the way the editing panel shows it."""
        value = self.get_value()
        if self.formatter is not None:
            return self.formatter(value)
        if self.display_decimals is not None and isinstance(value, float):
            return f"{value:.{self.display_decimals}f}"
        return str(value)

    def supports_slider(self) -> bool:
        """Return ``True`` when this variable can be controlled by a slider."""
        return (
            self.setter is not None and self.value_range is not None and not self.metric
        )


class LiveVariableRegistry:
    """Registry for all ``LiveVariable`` instances.

    When ``strict`` is ``True`` (the default), recording a metric that has not
    been registered raises immediately. Test fixtures that clear the registry
    set ``strict = False`` so timing helpers in library code stay quiet.
    """

    def __init__(self) -> None:
        self._variables: dict[str, LiveVariable] = {}
        self.strict: bool = True

    def register(
        self,
        name: str,
        getter: Callable[[], Any],
        setter: Callable[[Any], None] | None = None,
        *,
        description: str = "",
        formatter: Callable[[Any], str] | None = None,
        display_decimals: int | None = None,
        value_range: FloatRange | None = None,
    ) -> LiveVariable:
        """Register a new live variable."""
        if name in self._variables:
            raise ValueError(f"Live variable '{name}' already registered")
        live_var = LiveVariable(
            name=name,
            description=description,
            getter=getter,
            setter=setter,
            formatter=formatter,
            display_decimals=display_decimals,
            value_range=value_range,
        )
        self._variables[name] = live_var
        return live_var

    def register_metric(
        self,
        name: str,
        description: str = "",
        num_samples: int = 1000,
        formatter: Callable[[Any], str] | None = None,
    ) -> LiveVariable:
        """Register a metric variable that only tracks statistics.

        Args:
            name: Variable name
            description: Human-readable description
            num_samples: Number of recent samples to keep
            formatter: Optional custom formatter for display

        Returns:
            The created LiveVariable
        """
        if name in self._variables:
            raise ValueError(f"Live variable '{name}' already registered")

        samples = SampleWindow(num_samples)

        def getter() -> str:
            if samples.sample_count == 0:
                return "No samples"
            return samples.summary()

        live_var = LiveVariable(
            name=name,
            description=description,
            getter=getter,
            formatter=formatter,
            samples=samples,
            metric=True,
        )

        self._variables[name] = live_var
        return live_var

    def register_metrics(self, specs: Sequence[MetricSpec]) -> None:
        """Register each ``MetricSpec`` that is not registered yet."""
        for spec in specs:
            if spec.name in self._variables:
                continue
            self.register_metric(
                spec.name, description=spec.description, num_samples=spec.num_samples
            )

    def unregister(self, name: str) -> None:
        """Remove ``name`` if present."""
        self._variables.pop(name, None)

    def get_variable(self, name: str) -> LiveVariable | None:
        """Retrieve a registered ``LiveVariable`` by name."""
        return self._variables.get(name)

    def get_all_variables(self) -> list[LiveVariable]:
        """Return all registered variables, vars first then metrics, each group sorted."""
        return sorted(self._variables.values(), key=lambda v: (v.metric, v.name))

    def get_slider_variables(self) -> list[LiveVariable]:
        """Return the writable, ranged variables an editing panel shows."""
        return [var for var in self.get_all_variables() if var.supports_slider()]

    def set_value(self, name: str, value: Any) -> bool:
        """Set a variable by name. Returns ``False`` if missing or read-only."""
        var = self.get_variable(name)
        if var is None:
            return False
        return var.set_value(value)

    def record_metric(self, name: str, value: float) -> None:
        """Record a value to a metric variable.

        Raises:
            KeyError: If ``name`` is not registered or is not a metric.
        """
        var = self.get_variable(name)
        if var is None:
            raise KeyError(f"Metric '{name}' is not registered")
        if var.samples is None:
            raise KeyError(f"Variable '{name}' is not a metric")
        var.record_value(value)


# Global registry instance used throughout the application
live_variable_registry = LiveVariableRegistry()


# Timing helper for recording wall-clock time to a metric.
# Works as both a context manager and a decorator:
#   with record_time_live_variable("time.cloud.bake_ms"): ...
#   @record_time_live_variable("time.cloud.tick_ms")
@contextmanager
def record_time_live_variable(metric_name: str):
    """Record elapsed wall-clock time (ms) to the named metric.

    In strict mode (the default), raises ``KeyError`` if the metric is not
    registered. With ``strict`` off, unregistered metrics are skipped.
    """
    start = perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (perf_counter() - start) * 1000
        ctx = nullcontext() if live_variable_registry.strict else suppress(KeyError)
        with ctx:
            live_variable_registry.record_metric(metric_name, elapsed_ms)
