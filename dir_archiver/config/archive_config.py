from typing import Optional

from mcdreforged.api.utils import Serializable

from dir_archiver import constants
from dir_archiver.types.zip_compress_method import ZipCompressMethod


class ArchiveConfig(Serializable):
	compress_method: ZipCompressMethod = ZipCompressMethod.bzip2
	compress_level: Optional[int] = None  # None for the default level of the compress method
	create_directory_entries: bool = True
	comment_format: str = constants.DEFAULT_ARCHIVE_COMMENT_FORMAT

	def validate(self):
		if not self.compress_method.value.accepts_level(self.compress_level):
			raise ValueError('compress level {} is not supported by compress method {}'.format(self.compress_level, self.compress_method.name))

	def get_effective_compress_level(self) -> Optional[int]:
		if self.compress_level is None:
			return self.compress_method.value.default_level
		return self.compress_level

	def format_comment(self, profile_name: str) -> str:
		return self.comment_format.format(name=profile_name)
