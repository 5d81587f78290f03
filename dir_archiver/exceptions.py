from pathlib import Path
from typing import List, Optional


class DirArchiverError(Exception):
	pass


class ProfileLoadError(DirArchiverError):
	def __init__(self, path: Path, message: str):
		super().__init__('failed to load profile {!r}: {}'.format(str(path), message))
		self.path = path


class InvalidPathError(DirArchiverError):
	"""
	A configured directory is missing, is not a directory, or cannot be placed under a common base.
	Raised before anything gets written
	"""
	def __init__(self, path: Path, reason: str):
		super().__init__('invalid path {!r}: {}'.format(str(path), reason))
		self.path = path
		self.reason = reason


class TraversalError(DirArchiverError):
	"""
	Non-fatal. A directory or a file could not be read during the run
	"""
	def __init__(self, path: Path, cause: OSError):
		super().__init__('cannot read {!r}: {}'.format(str(path), cause))
		self.path = path
		self.cause = cause


class UnsupportedEntryTypeError(DirArchiverError):
	"""
	Non-fatal. A symlink or a special file was found and skipped
	"""
	def __init__(self, path: Path, kind: str):
		super().__init__('unsupported entry type {} at {!r}'.format(kind, str(path)))
		self.path = path
		self.kind = kind


class ArchiveEntryCollisionError(DirArchiverError):
	def __init__(self, archive_name: str, sources: List[Path]):
		super().__init__('archive path {!r} is claimed by multiple directories: {}'.format(archive_name, ', '.join(map(str, sources))))
		self.archive_name = archive_name
		self.sources = sources


class ArchiveSinkError(DirArchiverError):
	"""
	The output destination could not be opened for writing
	"""
	def __init__(self, sink_name: str, cause: Optional[Exception]):
		super().__init__('cannot open archive output {!r}: {}'.format(sink_name, cause))
		self.sink_name = sink_name
		self.cause = cause


class ArchiveFinalizationError(DirArchiverError):
	"""
	The output could not be written or finalized. The partial output is not a valid archive
	"""
	def __init__(self, sink_name: str, cause: Optional[Exception]):
		super().__init__('cannot finalize archive {!r}: {}'.format(sink_name, cause))
		self.sink_name = sink_name
		self.cause = cause
