import os
from pathlib import Path
from typing import List, Sequence, Union

PathLike = Union[str, 'os.PathLike[str]']


def normalize(path: PathLike) -> Path:
	"""
	Absolute and lexically normalized. Symlinks are NOT resolved
	"""
	return Path(os.path.normpath(os.path.abspath(path)))


def _comparable(part: str) -> str:
	# case folding follows the host, e.g. no-op on posix
	return os.path.normcase(part)


def is_same_or_inside(child: Path, parent: Path) -> bool:
	child_parts = [_comparable(p) for p in child.parts]
	parent_parts = [_comparable(p) for p in parent.parts]
	return child_parts[:len(parent_parts)] == parent_parts


def common_base(paths: Sequence[PathLike]) -> Path:
	"""
	The deepest directory shared by all given paths, compared component by component,
	so "/foo/ba" and "/foo/bar" share "/foo" only

	With a single path, its parent is returned, so the path itself shows up as a top-level folder

	:raise ValueError: no path is given, or the paths share nothing, e.g. they are on different drives
	"""
	if len(paths) == 0:
		raise ValueError('no path is given')

	normalized = [normalize(p) for p in paths]
	if len(normalized) == 1:
		return normalized[0].parent

	common: List[str] = []
	for parts in zip(*[p.parts for p in normalized]):
		first = _comparable(parts[0])
		if any(_comparable(part) != first for part in parts[1:]):
			break
		common.append(parts[0])

	if len(common) == 0:
		raise ValueError('paths {} have no common ancestor'.format([str(p) for p in normalized]))
	return Path(*common)


def remove_nested_paths(paths: Sequence[Path]) -> List[Path]:
	"""
	Drop paths that are the same as, or inside of, another path in the list.
	For duplicated paths the first occurrence is kept. Order is preserved
	"""
	result: List[Path] = []
	for i, path in enumerate(paths):
		covered = False
		for j, other in enumerate(paths):
			if i == j or not is_same_or_inside(path, other):
				continue
			if is_same_or_inside(other, path):  # duplicated
				covered = j < i
			else:
				covered = True
			if covered:
				break
		if not covered:
			result.append(path)
	return result


def to_archive_name(path: Path, base: Path) -> str:
	"""
	The posix-style path of the given path relative to the base path

	:raise ValueError: the path is not inside the base path
	"""
	return path.relative_to(base).as_posix()
