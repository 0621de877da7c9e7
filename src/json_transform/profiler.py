"""Performance profiler for compile and apply operations."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one profiled operation."""
    operation_name: str
    duration: float
    input_size: int
    output_size: int
    statement_count: int
    memory_start_mb: float
    memory_end_mb: float

    @property
    def memory_peak_mb(self) -> float:
        return max(self.memory_start_mb, self.memory_end_mb)

    @property
    def throughput_mbps(self) -> float:
        if self.duration <= 0:
            return 0.0
        return self.input_size / 1024 / 1024 / self.duration


class OperationProbe:
    """Mutable record a profiled block fills in before it exits."""

    def __init__(self):
        self.output_size = 0
        self.statement_count = 0


class PerformanceProfiler:
    """
    Performance profiler for transformation operations.

    Records wall-clock duration and resident memory of each profiled
    compile or apply call, keeping them in ``metrics_history``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager profiling the enclosed block.

        The block may set ``output_size`` and ``statement_count`` on the
        yielded object. Metrics are recorded even when the block raises.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        probe = OperationProbe()
        memory_start = self._memory_mb()
        started = time.perf_counter()
        try:
            yield probe
        finally:
            metrics = PerformanceMetrics(
                operation_name=operation_name,
                duration=time.perf_counter() - started,
                input_size=input_size,
                output_size=probe.output_size,
                statement_count=probe.statement_count,
                memory_start_mb=memory_start,
                memory_end_mb=self._memory_mb(),
            )
            self.metrics_history.append(metrics)
            self.logger.info(f"Profiled {operation_name}: {metrics.duration * 1000:.2f}ms, "
                             f"{metrics.statement_count} statements, "
                             f"memory {metrics.memory_end_mb:.1f} MB")

    def get_performance_summary(self) -> Dict[str, Any]:
        """Summarize all recorded metrics."""
        history = self.metrics_history
        if not history:
            return {"total_operations": 0}

        return {
            "total_operations": len(history),
            "total_duration": sum(m.duration for m in history),
            "total_input_mb": sum(m.input_size for m in history) / 1024 / 1024,
            "total_output_mb": sum(m.output_size for m in history) / 1024 / 1024,
            "average_throughput_mbps": sum(m.throughput_mbps for m in history) / len(history),
            "max_memory_peak_mb": max(m.memory_peak_mb for m in history),
            "operations": [m.operation_name for m in history],
        }

    def format_summary(self) -> str:
        """Render the summary as indented text for terminal output."""
        summary = self.get_performance_summary()
        if not summary["total_operations"]:
            return "Performance Summary: no operations recorded"
        return "\n".join([
            "Performance Summary:",
            f"  Total Operations: {summary['total_operations']}",
            f"  Operations: {', '.join(summary['operations'])}",
            f"  Total Duration: {summary['total_duration'] * 1000:.2f}ms",
            f"  Total Input: {summary['total_input_mb']:.4f} MB",
            f"  Total Output: {summary['total_output_mb']:.4f} MB",
            f"  Average Throughput: {summary['average_throughput_mbps']:.2f} MB/s",
            f"  Max Memory Peak: {summary['max_memory_peak_mb']:.1f} MB",
        ])

    def _memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0
