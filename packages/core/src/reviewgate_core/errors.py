"""Error taxonomy for a gate run.

A failed gate decision is not an error; it travels as a Decision.
"""

from __future__ import annotations


class GateError(Exception):
    """Base class for conditions that stop a run before a decision is made."""


class ConfigError(GateError):
    """Missing credential or missing/unreadable authorized-reviewer source."""


class UpstreamError(GateError):
    """The GitHub API call failed (network error, rate limit, 404...)."""
