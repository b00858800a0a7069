"""Merges freshly fetched records into a stored record collection."""

from typing import Iterable, Mapping, TypeVar

from github_issue_mirror.synchronize.types import HasId

R = TypeVar("R", bound=HasId)


def reconcile_records(existing: Mapping[int, R] | None, fetched: Iterable[R], incremental: bool) -> dict[int, R]:
    """Combine stored records with fetched ones, keyed by record id.

    Incremental: start from the stored records and insert-or-replace every
    fetched record, so fetched data wins and records missing from the fetch
    are kept (the incremental listing only returns what changed).

    Full: the fetched records become the whole collection.

    The inputs are never mutated.
    """
    if incremental and existing is not None:
        merged: dict[int, R] = dict(existing)
    else:
        merged = {}
    for record in fetched:
        merged[record.id] = record
    return merged
