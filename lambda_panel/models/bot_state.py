"""Bot runtime state (function list reconciler, command metrics)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from .. import config
from ..reconciler import FunctionListReconciler
from .metrics import CommandMetrics

logger = logging.getLogger(__name__)

MAX_LATENCY_SAMPLES = 200


@dataclass
class BotState:
    """Runtime state for one bot session.

    The reconciler is built lazily from settings on first use and lives as
    long as the Application that owns this state.
    """

    command_metrics: dict[str, CommandMetrics] = field(default_factory=dict)
    reconciler: FunctionListReconciler | None = None

    def get_reconciler(self) -> FunctionListReconciler:
        if self.reconciler is None:
            self.reconciler = FunctionListReconciler.from_settings(config.settings)
            logger.info(
                "Function list reconciler ready (profile=%s region=%s ttl=%.0fs)",
                self.reconciler.profile,
                self.reconciler.region,
                self.reconciler.ttl_s,
            )
        return self.reconciler

    def metrics_for(self, name: str) -> CommandMetrics:
        return self.command_metrics.setdefault(name, CommandMetrics())

    def record_command(
        self, name: str, latency_s: float, ok: bool, error_msg: str | None
    ) -> None:
        metrics = self.metrics_for(name)
        metrics.count += 1
        metrics.last_run_ts = time.time()
        if ok:
            metrics.success += 1
        else:
            metrics.error += 1
            metrics.last_error = error_msg
        metrics.total_latency_s += latency_s
        metrics.max_latency_s = max(metrics.max_latency_s, latency_s)
        metrics.latencies_s.append(latency_s)
        if len(metrics.latencies_s) > MAX_LATENCY_SAMPLES:
            metrics.latencies_s.pop(0)

    def record_rate_limited(self, name: str) -> None:
        metrics = self.metrics_for(name)
        metrics.rate_limited += 1


BOT_STATE_KEY = "state"
