from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict

logger = logging.getLogger(__name__)

# Float accumulation of frame deltas lands just short of round due times.
_EPSILON = 1e-9


@dataclass(slots=True)
class ScheduledEvent:
	name: str
	due_at: float
	callback: Callable[[], None] = field(repr=False)
	interval: float | None = None
	sequence: int = 0

	@property
	def repeating(self) -> bool:
		return self.interval is not None


@dataclass(slots=True)
class EventScheduler:
	"""Named, cancellable one-shot and repeating callbacks on a tick-driven clock.

	Time only moves through :meth:`advance`, so whoever feeds the deltas
	decides when the clock is suspended. Each name holds at most one entry;
	scheduling under a name that is already taken cancels the earlier entry.
	"""

	_now: float = field(init=False, default=0.0)
	_entries: Dict[str, ScheduledEvent] = field(init=False, default_factory=dict)
	_sequence: int = field(init=False, default=0)

	@property
	def now(self) -> float:
		return self._now

	def schedule(self, name: str, delay: float, callback: Callable[[], None]) -> ScheduledEvent:
		return self._add(name, max(0.0, float(delay)), callback, interval=None)

	def schedule_repeating(self, name: str, interval: float, callback: Callable[[], None]) -> ScheduledEvent:
		interval = float(interval)
		if interval <= 0.0:
			raise ValueError(f"repeating interval must be positive, got {interval}")
		return self._add(name, interval, callback, interval=interval)

	def cancel(self, name: str) -> bool:
		entry = self._entries.pop(name, None)
		if entry is not None:
			logger.debug("cancelled scheduled event %s", name)
		return entry is not None

	def cancel_all(self) -> None:
		if self._entries:
			logger.debug("cancelled scheduled events %s", sorted(self._entries))
		self._entries.clear()

	def is_pending(self, name: str) -> bool:
		return name in self._entries

	def remaining(self, name: str) -> float | None:
		entry = self._entries.get(name)
		if entry is None:
			return None
		return max(0.0, entry.due_at - self._now)

	def pending_names(self) -> list[str]:
		return sorted(self._entries)

	def advance(self, dt: float) -> int:
		"""Move the clock forward by ``dt`` seconds and fire everything that came due.

		Entries fire in due-time order (ties in scheduling order). A callback may
		schedule or cancel entries; cancelled entries never fire. Returns the
		number of callbacks run.
		"""
		if dt <= 0.0:
			return 0
		self._now += float(dt)
		fired = 0
		while True:
			due = [entry for entry in self._entries.values() if entry.due_at <= self._now + _EPSILON]
			if not due:
				break
			entry = min(due, key=lambda item: (item.due_at, item.sequence))
			if not entry.repeating:
				del self._entries[entry.name]
			else:
				entry.due_at += entry.interval
			fired += 1
			entry.callback()
		return fired

	def _add(
		self,
		name: str,
		delay: float,
		callback: Callable[[], None],
		*,
		interval: float | None,
	) -> ScheduledEvent:
		if name in self._entries:
			logger.debug("replacing scheduled event %s", name)
		self._sequence += 1
		entry = ScheduledEvent(
			name=name,
			due_at=self._now + delay,
			callback=callback,
			interval=interval,
			sequence=self._sequence,
		)
		self._entries[name] = entry
		return entry
