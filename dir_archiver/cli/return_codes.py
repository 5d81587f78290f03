import enum
import sys

from typing_extensions import NoReturn


class ErrorReturnCodes(enum.Enum):
	invalid_argument = 1
	argparse_error = 2  # see argparse.ArgumentParser.error
	action_failed = 3
	invalid_profile = 4
	invalid_path = 5
	archive_failed = 6
	partially_archived = 7

	def sys_exit(self) -> NoReturn:
		sys.exit(self.value)
