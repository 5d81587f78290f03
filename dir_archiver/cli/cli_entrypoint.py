import argparse
from typing import List, Dict

from dir_archiver import constants
from dir_archiver.cli import cli_utils
from dir_archiver.cli.cmd import CliCommandAdapterBase
from dir_archiver.cli.cmd.cmd_archive import ArchiveCommandAdapter
from dir_archiver.cli.cmd.cmd_scan import ScanCommandAdapter
from dir_archiver.cli.return_codes import ErrorReturnCodes
from dir_archiver.exceptions import InvalidPathError, ArchiveEntryCollisionError, ArchiveSinkError, ArchiveFinalizationError
from dir_archiver.logger import get as get_logger
from dir_archiver.utils import log_utils

__all__ = ['cli_entry']


def __prepare_logger():
	logger = get_logger()
	assert len(logger.handlers) == 1
	logger.handlers[0].setFormatter(log_utils.LOG_FORMATTER_NO_FUNC)


class CliEntrypoint:
	def __init__(self):
		self.logger = get_logger()
		self.adaptors = self.__create_command_adapters()

	@classmethod
	def __create_command_adapters(cls) -> Dict[str, CliCommandAdapterBase]:
		all_adapters: List[CliCommandAdapterBase] = [
			ArchiveCommandAdapter(),
			ScanCommandAdapter(),
		]
		adaptor_by_command = {adapter.command: adapter for adapter in all_adapters}

		if len(all_adapters) != len(adaptor_by_command):
			raise AssertionError(all_adapters, adaptor_by_command)

		return adaptor_by_command

	def main(self, argv: List[str] = None):
		parser = argparse.ArgumentParser(description='{} v{} CLI tools'.format(constants.PROGRAM_NAME, cli_utils.get_version()), formatter_class=argparse.ArgumentDefaultsHelpFormatter)
		parser.add_argument('-c', '--config', help='Path to the config json file. If not given, the default config is used')
		parser.add_argument('--debug', action='store_true', help='Enable debug logging')
		subparsers = parser.add_subparsers(title='Command', help='Available commands', dest='command')

		for adapter in self.adaptors.values():
			subparser = subparsers.add_parser(adapter.command, help=adapter.description, description=adapter.description)
			adapter.build_parser(subparser)

		args = parser.parse_args(argv)
		if args.command is None:
			parser.print_help()
			return

		adapter = self.adaptors.get(args.command)
		if adapter is None:
			self.logger.error('Unknown command {!r}'.format(args.command))
			ErrorReturnCodes.invalid_argument.sys_exit()

		try:
			adapter.run(args)
		except InvalidPathError as e:
			self.logger.error('Failed to archive profile: {}'.format(e))
			ErrorReturnCodes.invalid_path.sys_exit()
		except ArchiveEntryCollisionError as e:
			self.logger.error('Failed to archive profile: {}'.format(e))
			ErrorReturnCodes.invalid_path.sys_exit()
		except (ArchiveSinkError, ArchiveFinalizationError) as e:
			self.logger.error('Failed to archive profile: {}. The output file is not a valid archive'.format(e))
			ErrorReturnCodes.archive_failed.sys_exit()


def cli_entry():
	__prepare_logger()
	CliEntrypoint().main()
