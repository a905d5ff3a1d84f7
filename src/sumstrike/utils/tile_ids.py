from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import Iterator


@dataclass(slots=True)
class TileIdFactory:
	"""Hands out opaque tile identifiers that never repeat within a process.

	Ids are a prefix plus a monotonically increasing counter; callers must treat
	them as opaque strings.
	"""

	prefix: str = "t"
	start: int = 1

	_counter: Iterator[int] = field(init=False, repr=False)

	def __post_init__(self) -> None:
		self._counter = count(self.start)

	def __call__(self) -> str:
		return f"{self.prefix}{next(self._counter)}"
