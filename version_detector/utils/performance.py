"""Performance monitoring utilities for version detector."""

import time
import tracemalloc
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class PerformanceMetrics:
    """Container for performance metrics."""

    operation: str
    execution_time: float
    memory_usage: Optional[float] = None
    memory_peak: Optional[float] = None

    def __post_init__(self) -> None:
        """Convert memory usage to KB for readability."""
        if self.memory_usage is not None:
            self.memory_usage = self.memory_usage / 1024
        if self.memory_peak is not None:
            self.memory_peak = self.memory_peak / 1024


class PerformanceMonitor:
    """Timing and optional memory tracking for detection runs."""

    def __init__(self, enable_memory_tracking: bool = False) -> None:
        self.metrics: List[PerformanceMetrics] = []
        self.enable_memory_tracking = enable_memory_tracking

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """Context manager for measuring an operation.

        Args:
            name: Name of the operation being measured
        """
        started_tracing = False
        if self.enable_memory_tracking and not tracemalloc.is_tracing():
            tracemalloc.start()
            started_tracing = True

        start_memory = tracemalloc.get_traced_memory()[0] if self.enable_memory_tracking else None
        start_time = time.perf_counter()

        try:
            yield
        finally:
            execution_time = time.perf_counter() - start_time

            memory_usage = None
            peak_memory = None
            if self.enable_memory_tracking:
                current_memory, peak_memory = tracemalloc.get_traced_memory()
                memory_usage = current_memory - start_memory
                if started_tracing:
                    tracemalloc.stop()

            self.metrics.append(PerformanceMetrics(
                operation=name,
                execution_time=execution_time,
                memory_usage=memory_usage,
                memory_peak=peak_memory,
            ))

    def get_summary(self) -> Dict[str, Any]:
        """Get performance summary.

        Returns:
            Dictionary with performance summary, empty when nothing was measured
        """
        if not self.metrics:
            return {}

        total_time = sum(m.execution_time for m in self.metrics)

        summary = {
            "total_executions": len(self.metrics),
            "total_time": total_time,
            "average_time": total_time / len(self.metrics),
            "operations": [m.operation for m in self.metrics],
        }

        if self.enable_memory_tracking:
            summary["max_peak_memory_kb"] = max(m.memory_peak or 0 for m in self.metrics)

        return summary
