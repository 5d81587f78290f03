import contextlib
from pathlib import Path
from typing import List

from typing_extensions import override

from dir_archiver.action.profile_action_base import ProfileActionBase
from dir_archiver.archive_writer import ArchiveWriter, ArchiveSink
from dir_archiver.exceptions import ArchiveSinkError
from dir_archiver.types.archive_result import ArchiveResult
from dir_archiver.types.profile import Profile
from dir_archiver.utils import path_utils
from dir_archiver.utils.timer import Timer


class ArchiveProfileAction(ProfileActionBase[ArchiveResult]):
	"""
	Archive all directories of a profile into a single zip file

	Fatal errors abort the run and propagate. If the output is a path, the partial file is removed then.
	Everything else is collected into the returned :class:`ArchiveResult`
	"""
	def __init__(self, profile: Profile, output: ArchiveSink):
		super().__init__(profile)
		if isinstance(output, Path):
			output = path_utils.normalize(output)
		self.output = output

	@override
	def run(self) -> ArchiveResult:
		self.logger.info('Creating archive using profile {!r}...'.format(self.profile.name))
		timer = Timer()
		layout = self._resolve_layout()

		result = ArchiveResult()
		excluded_paths: List[Path] = []
		if isinstance(self.output, Path):
			excluded_paths.append(self.output)
			try:
				self.output.parent.mkdir(parents=True, exist_ok=True)
			except OSError as e:
				raise ArchiveSinkError(self.output.as_posix(), e) from e
		walker = self._create_walker(result, excluded_paths=excluded_paths)

		archive_config = self.config.archive
		try:
			with ArchiveWriter.open(
					self.output, result,
					compress_method=archive_config.compress_method,
					compress_level=archive_config.get_effective_compress_level(),
					comment=archive_config.format_comment(self.profile.name),
			) as writer:
				self.logger.info('Archiving {} directories...'.format(len(layout.roots)))
				for root in layout.roots:
					self.logger.info('Archiving directory {!r}...'.format(str(root)))
					for entry in walker.walk(root, layout.base):
						writer.write_entry(entry)
				self.logger.info('Finishing archive...')
		except Exception:
			if isinstance(self.output, Path):
				with contextlib.suppress(OSError):
					self.output.unlink(missing_ok=True)
			raise

		timer.stop()
		self.logger.info('Created and finished archive {} in {:.2f}s, written {} entries ({} bytes), ignored {}, failures {}'.format(
			self.__output_name(), timer.get_elapsed(),
			result.written_count, result.written_size, result.ignored_count, len(result.failures),
		))
		return result

	def __output_name(self) -> str:
		if isinstance(self.output, Path):
			return repr(self.output.as_posix())
		return repr(self.output)
