"""Scan/clean state machine.

idle -> scanning -> results -> cleaning -> complete, with reset back to idle
from any stage. Progress counters advance on timer ticks; crossing 100 fires
the automatic transition once. The cleaning -> complete transition is the only
place a SessionCompletionEvent is produced.
"""

import threading
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Iterable, Optional

import structlog

from shared_types import BulkAction, ScanStage

from .catalog import CandidateCatalog
from .models import COMPRESS_FREED_FRACTION, CleaningRule, FlaggedItem, SessionCompletionEvent
from .rules import active_rules, filter_items
from .timer import Timer, TimerFactory, scheduler_timer_factory

logger = structlog.get_logger()

PROGRESS_MAX = 100


class Rejection(StrEnum):
    WRONG_STAGE = "wrong_stage"
    EMPTY_SELECTION = "empty_selection"
    NO_ACTIVE_RULES = "no_active_rules"
    NO_MATCHING_ITEMS = "no_matching_items"
    UNKNOWN_ITEM = "unknown_item"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a command. Falsy when the command was rejected."""

    accepted: bool
    reason: Optional[Rejection] = None

    def __bool__(self) -> bool:
        return self.accepted


ACCEPTED = ActionResult(True)


def _reject(reason: Rejection) -> ActionResult:
    return ActionResult(False, reason)


@dataclass(frozen=True)
class _CleaningSnapshot:
    selection: tuple[FlaggedItem, ...]
    bulk_action: BulkAction
    files_scanned: int


class ScanCleanMachine:
    """Drives one user's simulated scan-and-clean cycles."""

    def __init__(
        self,
        catalog: CandidateCatalog,
        on_complete: Optional[Callable[[SessionCompletionEvent], None]] = None,
        on_item_action: Optional[Callable[[FlaggedItem, BulkAction], None]] = None,
        timer_factory: Optional[TimerFactory] = None,
        clock: Callable[[], float] = time.monotonic,
        scan_interval: float = 0.05,
        clean_interval: float = 0.05,
        scan_step: int = 2,
        clean_step: int = 1,
    ):
        self.catalog = catalog
        self.on_complete = on_complete
        self.on_item_action = on_item_action
        self.timer_factory = timer_factory or scheduler_timer_factory()
        self.clock = clock
        self.scan_interval = scan_interval
        self.clean_interval = clean_interval
        self.scan_step = scan_step
        self.clean_step = clean_step

        self.bulk_action = BulkAction.DELETE
        self.last_event: Optional[SessionCompletionEvent] = None

        self._lock = threading.RLock()
        self._completed = threading.Event()
        self._generation = 0
        self._timer: Optional[Timer] = None
        self._clear()

    def _clear(self):
        self.stage = ScanStage.IDLE
        self.scan_progress = 0
        self.clean_progress = 0
        self._items: tuple[FlaggedItem, ...] = ()
        self._selected: set[str] = set()
        self._pending_rules: Optional[list[CleaningRule]] = None
        self._snapshot: Optional[_CleaningSnapshot] = None
        self._started_at: Optional[float] = None

    # --- read-only views ---

    @property
    def items(self) -> tuple[FlaggedItem, ...]:
        return self._items

    @property
    def selection(self) -> tuple[FlaggedItem, ...]:
        """Selected items, always a subset of ``items`` in catalog order."""
        return tuple(item for item in self._items if item.id in self._selected)

    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(item.id for item in self.selection)

    @property
    def selected_size_mb(self) -> float:
        return sum(item.size_mb for item in self.selection)

    @property
    def projected_space_freed_mb(self) -> float:
        total = self.selected_size_mb
        if self.bulk_action == BulkAction.COMPRESS:
            return total * COMPRESS_FREED_FRACTION
        return total

    @property
    def completed(self) -> bool:
        """True once the last cleaning cycle's completion handler has returned."""
        return self._completed.is_set()

    def wait_for_completion(self, timeout: Optional[float] = None) -> bool:
        return self._completed.wait(timeout)

    # --- commands ---

    def begin_scan(self, rules: Optional[Iterable[CleaningRule]] = None) -> ActionResult:
        """Start scanning. With ``rules``, results are limited to matching items."""
        with self._lock:
            if self.stage != ScanStage.IDLE:
                return _reject(Rejection.WRONG_STAGE)
            pending = None
            if rules is not None:
                pending = active_rules(rules)
                if not pending:
                    return _reject(Rejection.NO_ACTIVE_RULES)

            self._clear()
            self._pending_rules = pending
            self.stage = ScanStage.SCANNING
            self._started_at = self.clock()
            self._start_timer(self.scan_interval)
            logger.info("scan_started", rule_count=len(pending) if pending else 0)
            return ACCEPTED

    def apply_rules(self, rules: Iterable[CleaningRule]) -> ActionResult:
        """Jump straight to results with the rule-filtered catalog."""
        with self._lock:
            if self.stage not in (ScanStage.IDLE, ScanStage.RESULTS):
                return _reject(Rejection.WRONG_STAGE)
            rules = active_rules(rules)
            if not rules:
                return _reject(Rejection.NO_ACTIVE_RULES)
            filtered = filter_items(self.catalog.items(), rules)
            if not filtered:
                return _reject(Rejection.NO_MATCHING_ITEMS)

            if self.stage == ScanStage.IDLE:
                self._started_at = self.clock()
            self._show_results(filtered)
            logger.info("rules_applied", rule_count=len(rules), matched=len(filtered))
            return ACCEPTED

    def toggle(self, item_id: str) -> ActionResult:
        with self._lock:
            if self.stage != ScanStage.RESULTS:
                return _reject(Rejection.WRONG_STAGE)
            if item_id not in {item.id for item in self._items}:
                return _reject(Rejection.UNKNOWN_ITEM)
            if item_id in self._selected:
                self._selected.discard(item_id)
            else:
                self._selected.add(item_id)
            return ACCEPTED

    def set_selection(self, item_ids: Iterable[str]) -> ActionResult:
        """Replace the selection wholesale. Unknown ids are dropped."""
        with self._lock:
            if self.stage != ScanStage.RESULTS:
                return _reject(Rejection.WRONG_STAGE)
            known = {item.id for item in self._items}
            self._selected = {i for i in item_ids if i in known}
            return ACCEPTED

    def select_all(self) -> ActionResult:
        return self.set_selection(item.id for item in self._items)

    def set_bulk_action(self, action: BulkAction) -> ActionResult:
        with self._lock:
            if self.stage == ScanStage.CLEANING:
                return _reject(Rejection.WRONG_STAGE)
            self.bulk_action = BulkAction(action)
            return ACCEPTED

    def item_action(self, item_id: str, action: BulkAction) -> ActionResult:
        """Per-item action from the preview dialog.

        Every action is reported to ``on_item_action``; only delete removes the
        item from the working set.
        """
        action = BulkAction(action)
        with self._lock:
            if self.stage != ScanStage.RESULTS:
                return _reject(Rejection.WRONG_STAGE)
            item = next((i for i in self._items if i.id == item_id), None)
            if item is None:
                return _reject(Rejection.UNKNOWN_ITEM)
            if action == BulkAction.DELETE:
                self._items = tuple(i for i in self._items if i.id != item_id)
                self._selected.discard(item_id)

        if self.on_item_action:
            self.on_item_action(item, action)
        return ACCEPTED

    def start_cleaning(self, action: Optional[BulkAction] = None) -> ActionResult:
        with self._lock:
            if self.stage != ScanStage.RESULTS:
                return _reject(Rejection.WRONG_STAGE)
            selection = self.selection
            if not selection:
                logger.info("cleaning_rejected", reason=str(Rejection.EMPTY_SELECTION))
                return _reject(Rejection.EMPTY_SELECTION)
            if action is not None:
                self.bulk_action = BulkAction(action)

            self._snapshot = _CleaningSnapshot(
                selection=selection,
                bulk_action=self.bulk_action,
                files_scanned=len(self._items),
            )
            self.stage = ScanStage.CLEANING
            self.clean_progress = 0
            self._completed.clear()
            self._start_timer(self.clean_interval)
            logger.info(
                "cleaning_started",
                files=len(selection),
                bulk_action=str(self.bulk_action),
            )
            return ACCEPTED

    def reset(self) -> None:
        """Back to idle from any stage. Never emits an event."""
        with self._lock:
            if self.stage == ScanStage.IDLE and self._timer is None:
                return
            previous = self.stage
            self._stop_timer()
            self._generation += 1
            self._clear()
            self._completed.clear()
            logger.info("scan_reset", previous_stage=str(previous))

    # --- ticking ---

    def tick(self) -> None:
        """Advance the active progress counter by one step."""
        self._tick(self._generation)

    def _tick(self, generation: int) -> None:
        event = None
        with self._lock:
            if generation != self._generation:
                return
            if self.stage == ScanStage.SCANNING:
                self.scan_progress = min(PROGRESS_MAX, self.scan_progress + self.scan_step)
                if self.scan_progress >= PROGRESS_MAX:
                    self._finish_scan()
            elif self.stage == ScanStage.CLEANING:
                self.clean_progress = min(PROGRESS_MAX, self.clean_progress + self.clean_step)
                if self.clean_progress >= PROGRESS_MAX:
                    event = self._finish_cleaning()

        if event is None:
            return
        if self.on_complete:
            try:
                self.on_complete(event)
            except Exception as e:
                logger.error("session_completion_handler_failed", error=str(e))
        with self._lock:
            # A reset while the handler ran starts a new cycle; leave it unsignalled
            if generation == self._generation:
                self._completed.set()

    def _finish_scan(self):
        self._stop_timer()
        items = list(self.catalog.items())
        if self._pending_rules is not None:
            items = filter_items(items, self._pending_rules)
        self._show_results(items)
        logger.info("scan_complete", items=len(items))

    def _finish_cleaning(self) -> SessionCompletionEvent:
        self._stop_timer()
        snapshot = self._snapshot
        self._snapshot = None
        self.stage = ScanStage.COMPLETE
        event = SessionCompletionEvent.from_selection(
            snapshot.selection,
            snapshot.bulk_action,
            files_scanned=snapshot.files_scanned,
            duration_minutes=self._elapsed_minutes(),
        )
        self.last_event = event
        logger.info(
            "cleaning_complete",
            files_cleaned=event.files_cleaned,
            space_freed_mb=event.space_freed_mb,
        )
        return event

    def _show_results(self, items: list[FlaggedItem]):
        self._items = tuple(items)
        self._selected = {item.id for item in self._items}
        self._pending_rules = None
        self.scan_progress = PROGRESS_MAX
        self.stage = ScanStage.RESULTS

    def _elapsed_minutes(self) -> float:
        if self._started_at is None:
            return 0.0
        return round(max(0.0, self.clock() - self._started_at) / 60, 2)

    def _start_timer(self, interval: float):
        self._stop_timer()
        # Ticks queued by an earlier timer must not advance the new stage
        self._generation += 1
        generation = self._generation
        self._timer = self.timer_factory(interval, lambda: self._tick(generation))
        self._timer.start()

    def _stop_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
