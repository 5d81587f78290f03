from typing import BinaryIO, Optional


class BypassReader:
	"""
	Wraps a readable stream, counting the bytes read and remembering the read error, if any.
	Used to tell source read failures apart from archive write failures while copying
	"""
	def __init__(self, file_obj: BinaryIO):
		self.file_obj = file_obj
		self.read_len = 0
		self.read_error: Optional[OSError] = None

	def read(self, *args, **kwargs) -> bytes:
		try:
			data = self.file_obj.read(*args, **kwargs)
		except OSError as e:
			self.read_error = e
			raise
		self.read_len += len(data)
		return data

	def get_read_len(self) -> int:
		return self.read_len
