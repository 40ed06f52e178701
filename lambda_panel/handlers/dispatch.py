"""Dispatch layer: applies rate limiting then calls the real handlers."""

from __future__ import annotations

from .common import rate_limit
from . import functions, meta


# Meta
cmd_start = rate_limit(meta.cmd_start, name="start")
cmd_help = rate_limit(meta.cmd_help, name="help")
cmd_whoami = rate_limit(meta.cmd_whoami, name="whoami")
cmd_metrics = rate_limit(meta.cmd_metrics, name="metrics")

# Functions
cmd_lambdas = rate_limit(functions.cmd_lambdas, name="lambdas")
