import dataclasses
import json
from pathlib import Path
from typing import List, Tuple, FrozenSet, Any

from mcdreforged.api.utils import Serializable
from typing_extensions import Self

from dir_archiver.exceptions import ProfileLoadError
from dir_archiver.utils import path_utils


class _ProfileDocument(Serializable):
	name: str = ''
	dirs: List[str] = []
	ignores: List[str] = []
	ignore_patterns: List[str] = []


@dataclasses.dataclass(frozen=True)
class Profile:
	"""
	A named selection of directories to archive, and of the names to leave out

	``ignores`` are matched against exact file / directory names.
	``ignore_patterns`` are gitignore-style patterns matched against the path inside the archive
	"""
	name: str
	dirs: Tuple[Path, ...]
	ignores: FrozenSet[str] = frozenset()
	ignore_patterns: Tuple[str, ...] = ()

	def __post_init__(self):
		object.__setattr__(self, 'dirs', tuple(path_utils.normalize(d) for d in self.dirs))
		object.__setattr__(self, 'ignores', frozenset(self.ignores))
		object.__setattr__(self, 'ignore_patterns', tuple(self.ignore_patterns))

		if len(self.name) == 0:
			raise ValueError('profile name cannot be empty')
		if len(self.dirs) == 0:
			raise ValueError('profile {!r} has no directory to archive'.format(self.name))

	@classmethod
	def from_dict(cls, data: Any) -> Self:
		"""
		:raise ValueError: on malformed data
		"""
		if not isinstance(data, dict):
			raise ValueError('profile should be an object, found {}'.format(type(data).__name__))
		try:
			doc = _ProfileDocument.deserialize(data)
		except TypeError as e:
			raise ValueError(str(e)) from None
		return cls(
			name=doc.name,
			dirs=tuple(Path(d) for d in doc.dirs),
			ignores=frozenset(doc.ignores),
			ignore_patterns=tuple(doc.ignore_patterns),
		)

	@classmethod
	def load(cls, path: Path) -> Self:
		try:
			with open(path, 'r', encoding='utf8') as f:
				data = json.load(f)
		except OSError as e:
			raise ProfileLoadError(path, 'failed to read file: {}'.format(e)) from e
		except ValueError as e:
			raise ProfileLoadError(path, 'failed to deserialize value: {}'.format(e)) from e

		try:
			return cls.from_dict(data)
		except ValueError as e:
			raise ProfileLoadError(path, str(e)) from e
