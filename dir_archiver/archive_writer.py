import contextlib
import logging
import shutil
import sys
import tempfile
import zipfile
from pathlib import Path
from typing import Union, BinaryIO, Optional, Generator

from dir_archiver import logger, constants
from dir_archiver.exceptions import ArchiveSinkError, ArchiveFinalizationError, TraversalError
from dir_archiver.types.archive_entry import ArchiveEntry
from dir_archiver.types.archive_result import ArchiveResult
from dir_archiver.types.zip_compress_method import ZipCompressMethod
from dir_archiver.utils.bypass_io import BypassReader

ArchiveSink = Union[Path, BinaryIO]


def _set_compress_level(info: zipfile.ZipInfo, level: int):
	# ZipFile.open() does not apply the archive-wide level to a given ZipInfo
	if sys.version_info >= (3, 13):
		info.compress_level = level
	else:
		info._compresslevel = level  # private before python 3.13, renamed to compress_level there


class ArchiveWriter:
	"""
	Streams entries into a single zip file, in the order they are given

	Use :meth:`open` for a scoped writer. The zip file gets finalized when the scope exits normally,
	and gets released, without a valid central directory, when the scope exits with an error
	"""
	SPOOL_MAX_SIZE = 16 * 1024 * 1024  # larger sources are staged in a temporary file

	def __init__(
			self, sink: ArchiveSink, result: ArchiveResult, *,
			compress_method: ZipCompressMethod = ZipCompressMethod.deflated, compress_level: Optional[int] = None, comment: str = '',
	):
		self.logger: logging.Logger = logger.get()
		self.sink = sink
		self.result = result
		self.compress_method = compress_method
		self.compress_level = compress_level
		self.comment = comment
		self.__zipf: Optional[zipfile.ZipFile] = None

	@classmethod
	@contextlib.contextmanager
	def open(cls, sink: ArchiveSink, result: ArchiveResult, **kwargs) -> Generator['ArchiveWriter', None, None]:
		writer = cls(sink, result, **kwargs)
		writer.__open()
		try:
			yield writer
		except BaseException:
			writer.abort()
			raise
		writer.close()

	@property
	def sink_name(self) -> str:
		if isinstance(self.sink, Path):
			return self.sink.as_posix()
		return repr(self.sink)

	def __open(self):
		if self.__zipf is not None:
			raise RuntimeError('writer is already opened')
		try:
			self.__zipf = zipfile.ZipFile(
				self.sink, 'w',
				compression=self.compress_method.value.compression,
				compresslevel=self.compress_level,
			)
		except OSError as e:
			raise ArchiveSinkError(self.sink_name, e) from e

	def __get_zipf(self) -> zipfile.ZipFile:
		if self.__zipf is None:
			raise RuntimeError('writer is not opened')
		return self.__zipf

	def write_entry(self, entry: ArchiveEntry) -> bool:
		"""
		:return: True if the entry is written, False if it is skipped due to a read failure
		:raise ArchiveFinalizationError: the archive output cannot be written
		"""
		zipf = self.__get_zipf()
		if entry.is_dir:
			return self.__write_directory(zipf, entry)
		else:
			return self.__write_file(zipf, entry)

	def __write_directory(self, zipf: zipfile.ZipFile, entry: ArchiveEntry) -> bool:
		info: Optional[zipfile.ZipInfo] = None
		with self.result.handling_os_error(entry.source):
			info = zipfile.ZipInfo.from_file(entry.source, entry.dest, strict_timestamps=False)
		if info is None:
			self.logger.warning('Failed to inspect directory {!r}, skipped'.format(str(entry.source)))
			return False

		self.logger.debug('add dir {} to zipfile'.format(info.filename))
		try:
			zipf.writestr(info, b'')
		except OSError as e:
			raise ArchiveFinalizationError(self.sink_name, e) from e
		return True

	def __write_file(self, zipf: zipfile.ZipFile, entry: ArchiveEntry) -> bool:
		# the file might be gone or become unreadable since it was discovered
		try:
			info = zipfile.ZipInfo.from_file(entry.source, entry.dest, strict_timestamps=False)
			f_in = open(entry.source, 'rb')
		except OSError as e:
			self.logger.warning('Failed to read file {!r}, skipped: {}'.format(str(entry.source), e))
			self.result.add_failure(entry.source, TraversalError(entry.source, e))
			return False

		info.compress_type = self.compress_method.value.compression
		if self.compress_level is not None:
			_set_compress_level(info, self.compress_level)

		self.logger.debug('Compressing file {!r}'.format(str(entry.source)))
		reader = BypassReader(f_in)
		with f_in, tempfile.SpooledTemporaryFile(max_size=self.SPOOL_MAX_SIZE) as spool:
			# read the whole source first, so a read failure leaves nothing in the archive
			try:
				shutil.copyfileobj(reader, spool)
			except OSError as e:
				if reader.read_error is None:
					raise ArchiveFinalizationError(self.sink_name, e) from e
				self.logger.warning('Failed to read file {!r} after {} bytes, skipped: {}'.format(str(entry.source), reader.get_read_len(), e))
				self.result.add_failure(entry.source, TraversalError(entry.source, e))
				return False

			spool.seek(0)
			try:
				with zipf.open(info, 'w') as zip_item:
					shutil.copyfileobj(spool, zip_item)
			except OSError as e:
				raise ArchiveFinalizationError(self.sink_name, e) from e

		self.result.add_written(reader.get_read_len())
		return True

	def close(self):
		"""
		Write the zip central directory and release the output

		:raise ArchiveFinalizationError: the output cannot be flushed. The output is not a valid archive then
		"""
		zipf = self.__get_zipf()
		self.__zipf = None
		if len(self.comment) > 0:
			zipf.comment = self.comment.encode('utf8')[:constants.ZIP_COMMENT_MAX_LENGTH]
		try:
			zipf.close()
			if not isinstance(self.sink, Path):
				self.sink.flush()
		except (OSError, ValueError) as e:
			raise ArchiveFinalizationError(self.sink_name, e) from e

	def abort(self):
		"""
		Release the output without caring about its validity. The output should be discarded
		"""
		if (zipf := self.__zipf) is None:
			return
		self.__zipf = None
		try:
			zipf.close()
		except (OSError, ValueError) as e:
			self.logger.warning('Failed to release archive output {}: {}'.format(self.sink_name, e))
