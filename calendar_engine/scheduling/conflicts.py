"""Time and resource conflict detection.

Conflicts are scoped per resource: two ranges whose scopes are both known and
differ never conflict, however much they overlap in time. Without scopes every
overlap is a conflict, which is what a single personal calendar needs.
"""

from collections.abc import Iterable

from calendar_engine.scheduling.intervals import overlaps
from calendar_engine.scheduling.models import Event, EventStatus, TimeRange
from calendar_engine.utils import get_logger

logger = get_logger(__name__)


def _scopes_differ(existing: str | None, candidate: str | None) -> bool:
    return existing is not None and candidate is not None and existing != candidate


def has_conflict(
    existing: TimeRange,
    candidate: TimeRange,
    resource_scope: str | None = None,
) -> bool:
    """Check if ``candidate`` conflicts with ``existing``.

    ``resource_scope`` overrides the candidate's own ``resource``.
    """
    candidate_scope = (
        resource_scope if resource_scope is not None else candidate.resource
    )
    if _scopes_differ(existing.resource, candidate_scope):
        return False
    return overlaps(existing, candidate)


def find_conflicts(
    candidate: TimeRange,
    pool: Iterable[TimeRange],
    resource_scope: str | None = None,
) -> list[TimeRange]:
    """Get every pool member conflicting with ``candidate``, in pool order.

    The detector knows nothing about identity; callers editing an event
    remove it from ``pool`` first.
    """
    return [
        existing
        for existing in pool
        if has_conflict(existing, candidate, resource_scope)
    ]


def find_event_conflicts(
    candidate: Event,
    events: Iterable[Event],
    *,
    exclude_id: str | None = None,
    scoped: bool = True,
) -> list[Event]:
    """Get events conflicting with ``candidate``.

    Cancelled events never conflict. The candidate itself (or ``exclude_id``)
    is left out so an edited event is not checked against its stored copy.
    When ``scoped`` is false, locations are ignored.
    """
    skip_id = exclude_id if exclude_id is not None else candidate.id
    candidate_range = candidate.time_range
    if not scoped:
        candidate_range = candidate_range.model_copy(update={"resource": None})

    conflicts = []
    for event in events:
        if event.id == skip_id or event.status == EventStatus.CANCELLED:
            continue
        existing = event.time_range
        if not scoped:
            existing = existing.model_copy(update={"resource": None})
        if has_conflict(existing, candidate_range):
            conflicts.append(event)

    if conflicts:
        logger.debug(
            "Scheduling conflicts found",
            event_id=candidate.id,
            conflicts=[event.id for event in conflicts],
        )

    return conflicts
