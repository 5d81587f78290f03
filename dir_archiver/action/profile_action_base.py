import collections
import dataclasses
from abc import ABC
from pathlib import Path
from typing import List, Tuple, Collection, Dict, TypeVar

from dir_archiver.action import Action
from dir_archiver.directory_walker import DirectoryWalker
from dir_archiver.exceptions import InvalidPathError, ArchiveEntryCollisionError
from dir_archiver.ignore_matcher import IgnoreMatcher
from dir_archiver.types.archive_result import ArchiveResult
from dir_archiver.types.profile import Profile
from dir_archiver.utils import path_utils

_T = TypeVar('_T')


@dataclasses.dataclass(frozen=True)
class ArchiveLayout:
	base: Path
	roots: Tuple[Path, ...]  # nested and duplicated directories removed, in profile order


class ProfileActionBase(Action[_T], ABC):
	def __init__(self, profile: Profile):
		super().__init__()
		self.profile = profile

	def _resolve_layout(self) -> ArchiveLayout:
		"""
		:raise InvalidPathError: a directory is missing or is not a directory, or the directories share no ancestor
		:raise ArchiveEntryCollisionError: two directories would be stored under the same name
		"""
		for path in self.profile.dirs:
			if not path.exists():
				raise InvalidPathError(path, 'directory does not exist')
			if not path.is_dir():
				raise InvalidPathError(path, 'not a directory')

		try:
			base = path_utils.common_base(self.profile.dirs)
		except ValueError as e:
			raise InvalidPathError(self.profile.dirs[0], str(e)) from None

		roots = path_utils.remove_nested_paths(self.profile.dirs)
		remaining = list(roots)
		for path in self.profile.dirs:
			if path in remaining:
				remaining.remove(path)
			else:
				self.logger.info('Directory {!r} is already covered by another directory of the profile, skipped'.format(str(path)))

		self.__check_collisions(roots, base)
		self.logger.debug('Common base: {!r}, roots: {}'.format(str(base), [str(r) for r in roots]))
		return ArchiveLayout(base, tuple(roots))

	@classmethod
	def __check_collisions(cls, roots: List[Path], base: Path):
		sources: Dict[str, List[Path]] = collections.defaultdict(list)
		for root in roots:
			sources[path_utils.to_archive_name(root, base)].append(root)
		for archive_name, paths in sources.items():
			if len(paths) > 1:
				raise ArchiveEntryCollisionError(archive_name, paths)

	def _create_walker(self, result: ArchiveResult, *, excluded_paths: Collection[Path] = ()) -> DirectoryWalker:
		matcher = IgnoreMatcher(self.profile.ignores, self.profile.ignore_patterns)
		return DirectoryWalker(
			matcher, result,
			include_directories=self.config.archive.create_directory_entries,
			excluded_paths=excluded_paths,
		)
