import dataclasses
import enum
from pathlib import Path


class ArchiveEntryType(enum.Enum):
	file = enum.auto()
	directory = enum.auto()


@dataclasses.dataclass(frozen=True)
class ArchiveEntry:
	source: Path  # absolute path on the disk
	dest: str  # posix path inside the archive, relative to the common base
	type: ArchiveEntryType = ArchiveEntryType.file

	@property
	def is_dir(self) -> bool:
		return self.type == ArchiveEntryType.directory
