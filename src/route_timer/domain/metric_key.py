"""Metric name derivation for timed requests.

Keys look like ``timer.GET.200.users.-id-``: method, status and a path suffix
joined into a dot-hierarchical, Graphite-compatible name. Route patterns are
preferred over raw paths so that ``/users/42`` and ``/users/7`` share one
series; unmatched redirects and client errors collapse into ``unmapped``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from route_timer.domain.value_objects.enums import StatusSeries
from route_timer.domain.value_objects.http_status import status_series

UNKNOWN_PATH_SUFFIX = "/unmapped"
ROOT_SEGMENT = "root"

_UNMAPPED_SERIES = frozenset({StatusSeries.CLIENT_ERROR, StatusSeries.REDIRECTION})


@dataclass(frozen=True)
class RewriteRule:
    pattern: re.Pattern[str]
    replacement: str

    @classmethod
    def literal(cls, token: str, replacement: str) -> RewriteRule:
        return cls(re.compile(re.escape(token)), replacement)

    def apply(self, value: str) -> str:
        return self.pattern.sub(lambda _match: self.replacement, value)


# Order matters: "**" must be rewritten before "*".
DELIMITER_RULES: tuple[RewriteRule, ...] = (
    RewriteRule.literal("/-", "/"),
    RewriteRule.literal("-/", "/"),
)

TOKEN_RULES: tuple[RewriteRule, ...] = (
    RewriteRule(re.compile(r"[{}\[\]]"), "-"),
    RewriteRule.literal("**", "-star-star-"),
    RewriteRule.literal("*", "-star-"),
)

KEY_RULES: tuple[RewriteRule, ...] = (
    RewriteRule.literal("/", "."),
    RewriteRule.literal("..", "."),
)


def _apply_all(rules: tuple[RewriteRule, ...], value: str) -> str:
    for rule in rules:
        value = rule.apply(value)
    return value


def sanitize_pattern(pattern: str) -> str:
    """Make a route pattern safe to embed in a metric name."""
    result = _apply_all(DELIMITER_RULES, pattern)
    if result.endswith("-"):
        result = result[:-1]
    if result.startswith("-"):
        result = result[1:]
    return _apply_all(TOKEN_RULES, result)


def path_suffix(path: str, route_pattern: str | None, status: int) -> str:
    if route_pattern is not None:
        return sanitize_pattern(route_pattern)
    if status_series(status) in _UNMAPPED_SERIES:
        return UNKNOWN_PATH_SUFFIX
    return path


def normalize_key(raw: str) -> str:
    """Turn a slash-delimited name into a dot-delimited one."""
    key = _apply_all(KEY_RULES, raw)
    if key.endswith("."):
        key += ROOT_SEGMENT
    if key.startswith("_"):
        key = key[1:]
    return key


def derive_metric_key(
    method: str,
    path: str,
    route_pattern: str | None,
    status: int,
) -> str:
    suffix = path_suffix(path, route_pattern, status)
    return normalize_key(f"timer.{method}.{status}{suffix}")
