import dataclasses
import enum
import zipfile
from typing import Optional, Tuple


@dataclasses.dataclass(frozen=True)
class _ZipCompressMethodItem:
	compression: int
	level_range: Optional[Tuple[int, int]]  # inclusive, None if the method takes no level
	default_level: Optional[int] = None

	def accepts_level(self, level: Optional[int]) -> bool:
		if level is None:
			return True
		if self.level_range is None:
			return False
		return self.level_range[0] <= level <= self.level_range[1]


class ZipCompressMethod(enum.Enum):
	stored = _ZipCompressMethodItem(zipfile.ZIP_STORED, None)
	deflated = _ZipCompressMethodItem(zipfile.ZIP_DEFLATED, (0, 9), 6)
	bzip2 = _ZipCompressMethodItem(zipfile.ZIP_BZIP2, (1, 9), 9)
	lzma = _ZipCompressMethodItem(zipfile.ZIP_LZMA, None)
