from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..categories.model import CategoryKey
from ..common.datetime_utils import parse_iso_date
from ..core.constants import RATINGS_KEY
from ..database.json_collection import JsonCollection
from ..database.store import KeyValueStore
from .model import Rating
from .repository import RatingRepository

logger = logging.getLogger(__name__)


def _decode(raw: dict) -> Rating:
    raw_scores = raw.get("ratings")
    scores = {}
    if isinstance(raw_scores, dict):
        for key, value in raw_scores.items():
            try:
                scores[CategoryKey.from_storage(key)] = int(value)
            except (TypeError, ValueError):
                logger.warning("Dropping unreadable score %r=%r in rating %s", key, value, raw.get("id"))
    else:
        logger.warning("Rating %s has no score map", raw.get("id"))

    return Rating(
        record_id=str(raw["id"]),
        student_id=str(raw["studentId"]),
        day=parse_iso_date(raw["date"]),
        scores=scores,
        average=float(raw.get("average") or 0),
        created_at=float(raw.get("createdAt", 0)),
    )


def _encode(r: Rating) -> dict:
    return {
        "id": r.record_id,
        "studentId": r.student_id,
        "date": r.day.isoformat(),
        "ratings": {k.to_storage(): v for k, v in r.scores.items()},
        "average": r.average,
        "createdAt": r.created_at,
    }


class KVRatingRepository(RatingRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, RATINGS_KEY, decode=_decode, encode=_encode)

    def list_all(self) -> Sequence[Rating]:
        return self._items.all()

    def list_for_student(self, student_id: str) -> Sequence[Rating]:
        return [r for r in self._items.all() if r.student_id == student_id]

    def get_for_student_and_date(self, student_id: str, day: date) -> Optional[Rating]:
        return self._items.find(lambda r: r.student_id == student_id and r.day == day)

    def upsert(self, rating: Rating) -> None:
        self._items.upsert(lambda r: r.record_id == rating.record_id, rating)

    def replace_all(self, ratings: Sequence[Rating]) -> None:
        self._items.replace_all(ratings)

    def delete_for_student(self, student_id: str) -> int:
        return self._items.remove_where(lambda r: r.student_id == student_id)
