# src/naming/policy.py — v1
"""Manifest and tracking-document naming.

PipelineRun names look like ``st-2-build-170405ab12``: prefix, stage,
invocation name, then a suffix made of day-of-month, minute and second plus
the first four characters of the commit id. The timestamp is captured once
per request, so two invocations with the same stage and name in one request
get the same name. That collision is a known limitation; callers are warned,
not corrected.
"""

from __future__ import annotations

from datetime import datetime

NAME_PREFIX = "st"
TRACKING_PREFIX = "revisionrun"
SUFFIX_TIME_FORMAT = "%d%M%S"
COMMIT_FRAGMENT_LENGTH = 4


class InvalidIdentityError(ValueError):
    """Raised when the request identity cannot produce a name."""


def name_suffix(commit_id: str, now: datetime) -> str:
    """Return the time-plus-commit suffix shared by a request's manifests."""
    if len(commit_id) < COMMIT_FRAGMENT_LENGTH:
        raise InvalidIdentityError(
            f"Commit id {commit_id!r} is shorter than {COMMIT_FRAGMENT_LENGTH} characters"
        )
    return now.strftime(SUFFIX_TIME_FORMAT) + commit_id[:COMMIT_FRAGMENT_LENGTH]


def manifest_name(prefix: str, stage: int | str, name: str, suffix: str) -> str:
    return f"{prefix}-{stage}-{name}-{suffix}"


def tracking_name(commit_id: str) -> str:
    """Name of the revision-run ConfigMap for a commit."""
    if not commit_id:
        raise InvalidIdentityError("Commit id is empty")
    return f"{TRACKING_PREFIX}-{commit_id}"
