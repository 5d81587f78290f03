import dataclasses
from pathlib import Path
from typing import List, Tuple

from typing_extensions import override

from dir_archiver.action.profile_action_base import ProfileActionBase
from dir_archiver.types.archive_entry import ArchiveEntry
from dir_archiver.types.archive_result import ArchiveResult


@dataclasses.dataclass(frozen=True)
class ScanProfileResult:
	base: Path
	roots: Tuple[Path, ...]
	entries: List[ArchiveEntry]
	result: ArchiveResult


class ScanProfileAction(ProfileActionBase[ScanProfileResult]):
	"""
	Resolve and walk a profile without writing anything
	"""
	@override
	def run(self) -> ScanProfileResult:
		layout = self._resolve_layout()
		result = ArchiveResult()
		walker = self._create_walker(result)

		entries: List[ArchiveEntry] = []
		for root in layout.roots:
			entries.extend(walker.walk(root, layout.base))

		self.logger.debug('Scan done, {} entries, ignored {}, failures {}'.format(len(entries), result.ignored_count, len(result.failures)))
		return ScanProfileResult(layout.base, layout.roots, entries, result)
