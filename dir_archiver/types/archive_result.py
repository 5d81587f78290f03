import contextlib
import dataclasses
from pathlib import Path
from typing import List, Iterator

from dir_archiver.exceptions import TraversalError, UnsupportedEntryTypeError


@dataclasses.dataclass(frozen=True)
class ArchiveFailure:
	path: Path
	error: Exception

	@property
	def is_unsupported_entry(self) -> bool:
		return isinstance(self.error, UnsupportedEntryTypeError)


class ArchiveResult:
	"""
	Counters and non-fatal failures of a single archive run
	"""
	def __init__(self):
		self.written_count = 0
		self.written_size = 0  # raw bytes read from the source files
		self.ignored_count = 0
		self.failures: List[ArchiveFailure] = []

	def add_written(self, raw_size: int):
		self.written_count += 1
		self.written_size += raw_size

	def add_ignored(self):
		self.ignored_count += 1

	def add_failure(self, path: Path, error: Exception):
		self.failures.append(ArchiveFailure(path, error))

	@contextlib.contextmanager
	def handling_os_error(self, path: Path):
		"""
		Record an OSError raised inside the block as a :class:`TraversalError` of the given path
		"""
		try:
			yield
		except OSError as e:
			self.add_failure(path, TraversalError(path, e))

	@property
	def skipped_count(self) -> int:
		return self.ignored_count + len(self.failures)

	@property
	def error_count(self) -> int:
		return len([f for f in self.failures if not f.is_unsupported_entry])

	def __iter__(self) -> Iterator[ArchiveFailure]:
		return self.failures.__iter__()

	def __repr__(self) -> str:
		return 'ArchiveResult(written={}, written_size={}, ignored={}, failures={})'.format(
			self.written_count, self.written_size, self.ignored_count, len(self.failures),
		)
