"""Prometheus series for the cluster autoscaler control loop.

The MetricsRegistry owns every series the control loop and the node group
managers update. It registers them with a collector registry (the exposition
sink scraped through /metrics) when it is constructed, and never unregisters
them.

Update methods are fire-and-forget: they never raise into the caller. A failure
inside prometheus_client is logged and dropped so instrumentation can't break
a scaling pass.

Usage:

    registry = MetricsRegistry(REGISTRY)

    with registry.time_phase(LoopPhase.SCALE_UP):
        scale_up()

    registry.set_node_group_size("pool-a", 5)
    registry.node_added("pool-a")
    registry.record_scale_failure("pool-a", FailureType.QUOTA)
"""

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from prometheus_client import CollectorRegistry, Counter, Gauge, Summary
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import Collector

from autoscaler_metrics.exceptions import MetricsRegistrationError

logger = logging.getLogger(__name__)

NAMESPACE = "cluster_autoscaler"


class ExactNameCounterCollector(Collector):
    """Exposes a Counter's children under the bare family name.

    The text exposition appends `_total` to every counter-typed family, so the
    children are re-emitted as an untyped family whose samples carry exactly
    the counter's declared name. The Counter stays the storage and keeps
    increments monotonic and thread safe.
    """

    def __init__(self, counter: Counter):
        self._counter = counter
        self.name = counter._name

    def _family(self) -> Metric:
        return Metric(self.name, self._counter._documentation, "unknown")

    def describe(self) -> list[Metric]:
        return [self._family()]

    def collect(self) -> Iterator[Metric]:
        family = self._family()
        for metric in self._counter.collect():
            for sample in metric.samples:
                if sample.name == metric.name + "_total":
                    family.add_sample(self.name, sample.labels, sample.value)
        yield family


class MetricsRegistry:
    """Control loop timing and node group state, exposed to Prometheus.

    Each label value gets its own child series the first time it is used.
    Children are created under the parent metric's lock and carry their own
    value lock, so updates for different node groups don't contend.
    """

    def __init__(
        self,
        collector_registry: CollectorRegistry,
        wall_clock: Callable[[], float] = time.time,
        perf_counter: Callable[[], int] = time.perf_counter_ns,
    ):
        """Create all series and register them with the exposition sink.

        Args:
            collector_registry: Registry scraped by the /metrics endpoint.
            wall_clock: Source of Unix time for phase start timestamps.
            perf_counter: Monotonic nanosecond clock that phase start readings
                come from.

        Raises:
            MetricsRegistrationError: A series name is already registered.
        """
        self.collector_registry = collector_registry
        self._wall_clock = wall_clock
        self._perf_counter = perf_counter

        # Phase timing
        self.last_timestamp = Gauge(
            "last_time_seconds",
            "Last time CA run some main loop fragment.",
            ["main"],
            namespace=NAMESPACE,
            registry=None,
        )
        self.last_duration = Gauge(
            "last_duration_microseconds",
            "Time spent in last main loop fragments in microseconds.",
            ["main"],
            namespace=NAMESPACE,
            registry=None,
        )
        self.duration = Summary(
            "duration_microseconds",
            "Time spent in main loop fragments in microseconds.",
            ["main"],
            namespace=NAMESPACE,
            registry=None,
        )

        # Node group state
        self.node_group_min = Gauge(
            "node_group_min_spec",
            "Current minimum bound of the node group.",
            ["node_group"],
            namespace=NAMESPACE,
            registry=None,
        )
        self.node_group_max = Gauge(
            "node_group_max_spec",
            "Current maximum bound of the node group.",
            ["node_group"],
            namespace=NAMESPACE,
            registry=None,
        )
        self.node_group_size = Gauge(
            "node_group_size",
            "Current size of the node group.",
            ["node_group"],
            namespace=NAMESPACE,
            registry=None,
        )
        self.scale_failures = Counter(
            "node_group_scaling_failures",
            "Number of failed scaling attempts of the node group.",
            ["node_group", "type"],
            namespace=NAMESPACE,
            registry=None,
        )

        for name, collector in (
            (self.duration._name, self.duration),
            (self.last_duration._name, self.last_duration),
            (self.last_timestamp._name, self.last_timestamp),
            (self.node_group_min._name, self.node_group_min),
            (self.node_group_max._name, self.node_group_max),
            (self.node_group_size._name, self.node_group_size),
            (self.scale_failures._name, ExactNameCounterCollector(self.scale_failures)),
        ):
            self._register(name, collector)

    def _register(self, name: str, collector: Collector) -> None:
        try:
            self.collector_registry.register(collector)
        except ValueError as e:
            raise MetricsRegistrationError(name, str(e)) from e
        logger.debug(f"Registered series {name}")

    def record_phase_start(self, phase: str) -> None:
        """Record the Unix time (whole seconds) at which a phase started."""
        try:
            self.last_timestamp.labels(main=phase).set(int(self._wall_clock()))
        except Exception as e:
            logger.error(f"Error recording start of phase {phase}: {e}")

    def record_phase_duration(self, phase: str, start: int) -> None:
        """Record how long a phase took.

        The elapsed time is computed once, in integer nanoseconds, and truncated
        toward zero to whole microseconds. That single value feeds both the
        last-duration gauge and the summary.

        Args:
            phase: Phase label value.
            start: time.perf_counter_ns() reading taken when the phase began.
        """
        try:
            elapsed_ns = self._perf_counter() - start
            if elapsed_ns >= 0:
                elapsed = elapsed_ns // 1000
            else:
                elapsed = -(-elapsed_ns // 1000)
            self.duration.labels(main=phase).observe(elapsed)
            self.last_duration.labels(main=phase).set(elapsed)
        except Exception as e:
            logger.error(f"Error recording duration of phase {phase}: {e}")

    @contextmanager
    def time_phase(self, phase: str) -> Iterator[None]:
        """Record start and duration around a block, including when it raises."""
        self.record_phase_start(phase)
        start = self._perf_counter()
        try:
            yield
        finally:
            self.record_phase_duration(phase, start)

    def set_node_group_min(self, node_group: str, min_size: int) -> None:
        """Record the configured minimum size of a node group."""
        try:
            self.node_group_min.labels(node_group=node_group).set(min_size)
        except Exception as e:
            logger.error(f"Error recording min size of {node_group}: {e}")

    def set_node_group_max(self, node_group: str, max_size: int) -> None:
        """Record the configured maximum size of a node group."""
        try:
            self.node_group_max.labels(node_group=node_group).set(max_size)
        except Exception as e:
            logger.error(f"Error recording max size of {node_group}: {e}")

    def set_node_group_size(self, node_group: str, size: int) -> None:
        """Record the observed size of a node group."""
        try:
            self.node_group_size.labels(node_group=node_group).set(size)
        except Exception as e:
            logger.error(f"Error recording size of {node_group}: {e}")

    def node_added(self, node_group: str) -> None:
        """Count one node added to a node group."""
        try:
            self.node_group_size.labels(node_group=node_group).inc()
        except Exception as e:
            logger.error(f"Error recording node added to {node_group}: {e}")

    def node_removed(self, node_group: str) -> None:
        """Count one node removed from a node group."""
        try:
            self.node_group_size.labels(node_group=node_group).dec()
        except Exception as e:
            logger.error(f"Error recording node removed from {node_group}: {e}")

    def record_scale_failure(self, node_group: str, failure_type: str) -> None:
        """Count a failed scaling attempt of a node group.

        Args:
            node_group: Node group the attempt targeted.
            failure_type: Failure category, e.g. a FailureType value.
        """
        try:
            self.scale_failures.labels(
                node_group=node_group, type=failure_type
            ).inc()
        except Exception as e:
            logger.error(
                f"Error recording {failure_type} scale failure of {node_group}: {e}"
            )
