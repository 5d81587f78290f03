import logging
import os
from pathlib import Path
from typing import Iterator, Collection, List

from dir_archiver import logger
from dir_archiver.exceptions import TraversalError, UnsupportedEntryTypeError
from dir_archiver.ignore_matcher import IgnoreMatcher
from dir_archiver.types.archive_entry import ArchiveEntry, ArchiveEntryType
from dir_archiver.types.archive_result import ArchiveResult
from dir_archiver.utils import path_utils


class DirectoryWalker:
	"""
	Lazily enumerates the archivable entries under a root directory

	Children are visited in the lexicographic order of their names, so identical trees always produce identical sequences.
	Symlinks are never followed. Problems are recorded into the given result instead of being raised
	"""
	def __init__(self, matcher: IgnoreMatcher, result: ArchiveResult, *, include_directories: bool = False, excluded_paths: Collection[Path] = ()):
		self.logger: logging.Logger = logger.get()
		self.matcher = matcher
		self.result = result
		self.include_directories = include_directories
		self.excluded_paths = {path_utils.normalize(p) for p in excluded_paths}

	def walk(self, root: Path, base: Path) -> Iterator[ArchiveEntry]:
		root = path_utils.normalize(root)
		base = path_utils.normalize(base)

		# a root that is the base itself has no name inside the archive
		if root != base:
			root_name = path_utils.to_archive_name(root, base)
			if self.matcher.should_ignore_path(root_name, is_dir=True):
				self.logger.warning('Archive root {!r} is ignored by the profile'.format(str(root)))
				self.result.add_ignored()
				return
			if self.include_directories:
				yield ArchiveEntry(root, root_name, ArchiveEntryType.directory)
		yield from self.__walk_dir(root, base)

	def __list_dir(self, dir_path: Path) -> List[os.DirEntry]:
		with os.scandir(dir_path) as it:
			return sorted(it, key=lambda e: e.name)

	def __walk_dir(self, dir_path: Path, base: Path) -> Iterator[ArchiveEntry]:
		try:
			children = self.__list_dir(dir_path)
		except OSError as e:
			self.logger.warning('Failed to read directory {!r}: {}'.format(str(dir_path), e))
			self.result.add_failure(dir_path, TraversalError(dir_path, e))
			return

		for child in children:
			path = Path(child.path)
			archive_name = path_utils.to_archive_name(path, base)
			try:
				is_symlink = child.is_symlink()
				is_dir = not is_symlink and child.is_dir(follow_symlinks=False)
				is_file = not is_symlink and child.is_file(follow_symlinks=False)
			except OSError as e:
				self.logger.warning('Failed to inspect {!r}: {}'.format(str(path), e))
				self.result.add_failure(path, TraversalError(path, e))
				continue

			if self.matcher.should_ignore_path(archive_name, is_dir=is_dir) or path in self.excluded_paths:
				self.logger.debug('Ignored {!r}'.format(archive_name))
				self.result.add_ignored()
			elif is_symlink:
				self.logger.debug('Skipped symlink {!r}'.format(str(path)))
				self.result.add_failure(path, UnsupportedEntryTypeError(path, 'symlink'))
			elif is_dir:
				if self.include_directories:
					yield ArchiveEntry(path, archive_name, ArchiveEntryType.directory)
				yield from self.__walk_dir(path, base)
			elif is_file:
				yield ArchiveEntry(path, archive_name, ArchiveEntryType.file)
			else:
				self.logger.debug('Skipped special file {!r}'.format(str(path)))
				self.result.add_failure(path, UnsupportedEntryTypeError(path, 'special file'))
