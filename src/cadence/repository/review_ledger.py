# SPDX-License-Identifier: MIT

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from cadence import configuration, time
from cadence.model.note_id import NoteId

logger = logging.getLogger(__name__)


class ReviewLedger(ABC):
    """Keyed store of the last review instant per note. Later writes win."""

    @abstractmethod
    def record_review(self, note_id: NoteId, timestamp: pendulum.DateTime) -> None:
        pass

    @abstractmethod
    def last_reviewed(self, note_id: NoteId) -> Optional[pendulum.DateTime]:
        pass

    @abstractmethod
    def forget(self, note_id: NoteId) -> bool:
        """Drop a note's review entry. Returns False if there was none."""
        pass

    @abstractmethod
    def all_reviews(self) -> dict[NoteId, pendulum.DateTime]:
        pass


class InMemoryReviewLedger(ReviewLedger):
    def __init__(
        self, reviews: Optional[dict[NoteId, pendulum.DateTime]] = None
    ) -> None:
        self._reviews: dict[NoteId, pendulum.DateTime] = dict(reviews or {})
        self._lock = threading.Lock()

    def record_review(self, note_id: NoteId, timestamp: pendulum.DateTime) -> None:
        with self._lock:
            self._reviews[note_id] = timestamp

    def last_reviewed(self, note_id: NoteId) -> Optional[pendulum.DateTime]:
        with self._lock:
            return self._reviews.get(note_id)

    def forget(self, note_id: NoteId) -> bool:
        with self._lock:
            return self._reviews.pop(note_id, None) is not None

    def all_reviews(self) -> dict[NoteId, pendulum.DateTime]:
        with self._lock:
            return dict(self._reviews)


class YamlReviewLedger(ReviewLedger):
    """
    Review ledger persisted to the `reviews.yaml` data file.

    Entries are ISO-8601 strings keyed by note id. Data is loaded lazily and
    written back on `flush()`.
    """

    def __init__(self) -> None:
        self._reviews: Optional[dict[NoteId, pendulum.DateTime]] = None
        self.is_dirty = False
        self._lock = threading.RLock()

    @property
    def reviews(self) -> dict[NoteId, pendulum.DateTime]:
        if self._reviews is None:
            self.__load_data()
        if self._reviews is None:
            raise ValueError()
        return self._reviews

    def __load_data(self) -> None:
        self._reviews = {}
        if not configuration.DATA_REVIEWS_PATH.is_file():
            return
        reviews_data = load(configuration.DATA_REVIEWS_PATH.read_text(), Loader=Loader)
        if reviews_data is None:
            return
        raw_reviews: dict[str, Any] = reviews_data.get("reviews") or {}
        for note_id, timestamp in raw_reviews.items():
            try:
                self._reviews[str(note_id)] = time.datetime_from_str(str(timestamp))
            except ValueError:
                logger.warning("skipping unreadable review entry for note %s", note_id)

    def __save_data(self, reviews: dict[NoteId, pendulum.DateTime]) -> None:
        reviews_data = {
            "reviews": {
                note_id: time.datetime_to_iso_str(timestamp)
                for note_id, timestamp in reviews.items()
            }
        }
        configuration.DATA_REVIEWS_PATH.write_text(dump(reviews_data, Dumper=Dumper))

    def flush(self) -> bool:
        with self._lock:
            if self._reviews is not None and self.is_dirty:
                self.__save_data(self._reviews)
                self.is_dirty = False
                return True
            return False

    def record_review(self, note_id: NoteId, timestamp: pendulum.DateTime) -> None:
        with self._lock:
            self.is_dirty = True
            self.reviews[note_id] = timestamp
        logger.info("recorded review for note %s at %s", note_id, timestamp)

    def last_reviewed(self, note_id: NoteId) -> Optional[pendulum.DateTime]:
        with self._lock:
            return self.reviews.get(note_id)

    def forget(self, note_id: NoteId) -> bool:
        with self._lock:
            if note_id not in self.reviews:
                return False
            self.is_dirty = True
            del self.reviews[note_id]
        logger.info("forgot review for note %s", note_id)
        return True

    def all_reviews(self) -> dict[NoteId, pendulum.DateTime]:
        with self._lock:
            return dict(self.reviews)


REVIEW_LEDGER_REPO = YamlReviewLedger()
