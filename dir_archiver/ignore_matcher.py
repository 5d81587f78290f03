from typing import Iterable, FrozenSet, Optional

import pathspec


class IgnoreMatcher:
	"""
	Decides whether a file or a directory is left out of the archive

	- names: exact match against the final path component. No wildcard, no case folding
	- patterns: gitignore-style patterns, matched against the posix path inside the archive
	"""
	def __init__(self, names: Iterable[str] = (), patterns: Iterable[str] = ()):
		self.names: FrozenSet[str] = frozenset(names)
		patterns = list(patterns)
		self.__spec: Optional[pathspec.GitIgnoreSpec] = pathspec.GitIgnoreSpec.from_lines(patterns) if len(patterns) > 0 else None

	def should_ignore(self, name: str) -> bool:
		return name in self.names

	def should_ignore_path(self, archive_name: str, *, is_dir: bool) -> bool:
		name = archive_name.rsplit('/', 1)[-1]
		if self.should_ignore(name):
			return True
		if self.__spec is not None:
			# trailing slash so that "foo/" patterns match directories only
			return self.__spec.match_file(archive_name + '/' if is_dir else archive_name)
		return False
