import io
import os
import tempfile
import unittest
import zipfile
from pathlib import Path
from unittest import mock

from dir_archiver.archive_writer import ArchiveWriter
from dir_archiver.exceptions import ArchiveFinalizationError, ArchiveSinkError, TraversalError
from dir_archiver.types.archive_entry import ArchiveEntry, ArchiveEntryType
from dir_archiver.types.archive_result import ArchiveResult
from dir_archiver.types.zip_compress_method import ZipCompressMethod


class _FlakySink(io.BytesIO):
	def __init__(self):
		super().__init__()
		self.broken = False

	def write(self, b) -> int:
		if self.broken:
			raise OSError(28, 'No space left on device')
		return super().write(b)


class _BrokenReadFile(io.BytesIO):
	def __init__(self, data: bytes):
		super().__init__(data)
		self.read_times = 0

	def read(self, *args, **kwargs) -> bytes:
		if self.read_times > 0:
			raise OSError(5, 'Input/output error')
		self.read_times += 1
		return super().read(*args, **kwargs)


class ArchiveWriterTestCase(unittest.TestCase):
	def setUp(self):
		self.__temp_dir = tempfile.TemporaryDirectory()
		self.temp_path = Path(self.__temp_dir.name)
		self.src = self.temp_path / 'src'
		self.src.mkdir()
		(self.src / 'hello.txt').write_bytes(b'hello world')
		(self.src / 'blob.bin').write_bytes(os.urandom(100 * 1024))
		(self.src / 'sub').mkdir()

	def tearDown(self):
		self.__temp_dir.cleanup()

	def entry(self, name: str, entry_type: ArchiveEntryType = ArchiveEntryType.file) -> ArchiveEntry:
		return ArchiveEntry(self.src / name, 'src/' + name, entry_type)

	def test_0_write_and_read_back(self):
		sink = io.BytesIO()
		result = ArchiveResult()
		with ArchiveWriter.open(sink, result, compress_method=ZipCompressMethod.bzip2, compress_level=9, comment='Directory Archiver [test]') as writer:
			self.assertTrue(writer.write_entry(self.entry('sub', ArchiveEntryType.directory)))
			self.assertTrue(writer.write_entry(self.entry('hello.txt')))
			self.assertTrue(writer.write_entry(self.entry('blob.bin')))

		self.assertEqual(2, result.written_count)
		self.assertEqual(11 + 100 * 1024, result.written_size)
		self.assertEqual(0, len(result.failures))

		sink.seek(0)
		with zipfile.ZipFile(sink) as zipf:
			self.assertIsNone(zipf.testzip())
			self.assertEqual(['src/sub/', 'src/hello.txt', 'src/blob.bin'], zipf.namelist())
			self.assertTrue(zipf.getinfo('src/sub/').is_dir())
			self.assertEqual(b'hello world', zipf.read('src/hello.txt'))
			self.assertEqual((self.src / 'blob.bin').read_bytes(), zipf.read('src/blob.bin'))
			self.assertEqual(zipfile.ZIP_BZIP2, zipf.getinfo('src/hello.txt').compress_type)
			self.assertEqual(b'Directory Archiver [test]', zipf.comment)

	def test_1_path_sink(self):
		output = self.temp_path / 'out.zip'
		with ArchiveWriter.open(output, ArchiveResult(), compress_method=ZipCompressMethod.stored) as writer:
			writer.write_entry(self.entry('hello.txt'))
		with zipfile.ZipFile(output) as zipf:
			self.assertEqual(zipfile.ZIP_STORED, zipf.getinfo('src/hello.txt').compress_type)
			self.assertEqual(b'hello world', zipf.read('src/hello.txt'))

	def test_2_vanished_file_is_skipped(self):
		sink = io.BytesIO()
		result = ArchiveResult()
		with ArchiveWriter.open(sink, result) as writer:
			self.assertFalse(writer.write_entry(self.entry('gone.txt')))
			self.assertTrue(writer.write_entry(self.entry('hello.txt')))

		self.assertEqual(1, result.written_count)
		self.assertEqual(1, len(result.failures))
		self.assertEqual(self.src / 'gone.txt', result.failures[0].path)
		self.assertIsInstance(result.failures[0].error, TraversalError)

		sink.seek(0)
		with zipfile.ZipFile(sink) as zipf:
			self.assertEqual(['src/hello.txt'], zipf.namelist())

	def test_3_unreadable_file_is_skipped(self):
		real_open = open
		bad_file = self.src / 'hello.txt'

		def fake_open(file, *args, **kwargs):
			if Path(file) == bad_file:
				raise PermissionError(13, 'Permission denied', str(file))
			return real_open(file, *args, **kwargs)

		sink = io.BytesIO()
		result = ArchiveResult()
		with mock.patch('dir_archiver.archive_writer.open', side_effect=fake_open, create=True):
			with ArchiveWriter.open(sink, result) as writer:
				self.assertFalse(writer.write_entry(self.entry('hello.txt')))
				self.assertTrue(writer.write_entry(self.entry('blob.bin')))

		self.assertEqual(1, result.written_count)
		self.assertEqual([bad_file], [f.path for f in result.failures])
		sink.seek(0)
		with zipfile.ZipFile(sink) as zipf:
			self.assertEqual(['src/blob.bin'], zipf.namelist())

	def test_4_finalization_failure(self):
		sink = _FlakySink()
		writer_ctx = ArchiveWriter.open(sink, ArchiveResult())
		with self.assertRaises(ArchiveFinalizationError):
			with writer_ctx as writer:
				writer.write_entry(self.entry('hello.txt'))
				sink.broken = True

	def test_5_write_failure_is_fatal(self):
		sink = _FlakySink()
		sink.broken = True
		with self.assertRaises(ArchiveFinalizationError):
			with ArchiveWriter.open(sink, ArchiveResult()) as writer:
				writer.write_entry(self.entry('hello.txt'))

	def test_6_unopenable_sink(self):
		with self.assertRaises(ArchiveSinkError):
			with ArchiveWriter.open(self.temp_path / 'no' / 'such' / 'dir' / 'out.zip', ArchiveResult()):
				pass

	def test_7_not_opened(self):
		writer = ArchiveWriter(io.BytesIO(), ArchiveResult())
		with self.assertRaises(RuntimeError):
			writer.write_entry(self.entry('hello.txt'))

	def test_8_file_failing_mid_read_is_skipped(self):
		real_open = open
		bad_file = self.src / 'blob.bin'

		def fake_open(file, *args, **kwargs):
			if Path(file) == bad_file:
				return _BrokenReadFile(bad_file.read_bytes())
			return real_open(file, *args, **kwargs)

		sink = io.BytesIO()
		result = ArchiveResult()
		with mock.patch('dir_archiver.archive_writer.open', side_effect=fake_open, create=True):
			with ArchiveWriter.open(sink, result) as writer:
				self.assertFalse(writer.write_entry(self.entry('blob.bin')))
				self.assertTrue(writer.write_entry(self.entry('hello.txt')))

		self.assertEqual(1, result.written_count)
		self.assertEqual([bad_file], [f.path for f in result.failures])
		self.assertIsInstance(result.failures[0].error, TraversalError)
		sink.seek(0)
		with zipfile.ZipFile(sink) as zipf:
			self.assertIsNone(zipf.testzip())
			self.assertEqual(['src/hello.txt'], zipf.namelist())

	def test_9_compress_level(self):
		(self.src / 'text.txt').write_bytes(b'hello world\n' * 10000)

		def compressed_size(level: int) -> int:
			sink = io.BytesIO()
			with ArchiveWriter.open(sink, ArchiveResult(), compress_method=ZipCompressMethod.deflated, compress_level=level) as writer:
				writer.write_entry(self.entry('text.txt'))
			sink.seek(0)
			with zipfile.ZipFile(sink) as zipf:
				self.assertEqual(b'hello world\n' * 10000, zipf.read('src/text.txt'))
				return zipf.getinfo('src/text.txt').compress_size

		self.assertGreater(compressed_size(0), 120000)
		self.assertLess(compressed_size(9), 10000)


if __name__ == '__main__':
	unittest.main()
