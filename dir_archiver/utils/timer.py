import time
from typing import Optional


def _now() -> float:
	return time.time()


class Timer:
	__start_time: float
	__end_time: Optional[float]

	def __init__(self):
		self.start()

	def start(self):
		self.__start_time = _now()
		self.__end_time = None

	def stop(self):
		self.__end_time = _now()

	def get_elapsed(self) -> float:
		end = self.__end_time if self.__end_time is not None else _now()
		return end - self.__start_time
