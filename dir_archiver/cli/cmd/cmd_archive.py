import argparse
import dataclasses
from pathlib import Path

from typing_extensions import override

from dir_archiver.action.archive_profile_action import ArchiveProfileAction
from dir_archiver.cli import cli_utils
from dir_archiver.cli.cmd import CliCommandHandlerBase, CommonCommandArgs, CliCommandAdapterBase
from dir_archiver.cli.return_codes import ErrorReturnCodes


@dataclasses.dataclass(frozen=True)
class ArchiveCommandArgs(CommonCommandArgs):
	profile_path: Path
	output_path: Path
	strict: bool


class ArchiveCommandHandler(CliCommandHandlerBase):
	def __init__(self, args: ArchiveCommandArgs):
		super().__init__()
		self.args = args

	def handle(self):
		self.init_environment(self.args)
		profile = cli_utils.load_profile(self.args.profile_path)

		result = ArchiveProfileAction(profile, self.args.output_path).run()
		if len(result.failures) > 0:
			self.logger.warning('Found {} failures during the archiving, {} of them are errors'.format(len(result.failures), result.error_count))
			cli_utils.log_failures(result)
			if self.args.strict and result.error_count > 0:
				ErrorReturnCodes.partially_archived.sys_exit()
		self.logger.info('Successfully archived profile {!r}'.format(profile.name))


class ArchiveCommandAdapter(CliCommandAdapterBase):
	@property
	@override
	def command(self) -> str:
		return 'archive'

	@property
	@override
	def description(self) -> str:
		return 'Archive the directories of a profile into a single zip file'

	@override
	def build_parser(self, parser: argparse.ArgumentParser):
		self._add_argument_profile(parser)
		parser.add_argument('-f', '--file', required=True, help='The output zip file. Example: my_backup.zip')
		parser.add_argument('--strict', action='store_true', help='Exit with a non-zero code if any file or directory could not be read')

	@override
	def run(self, args: argparse.Namespace):
		handler = ArchiveCommandHandler(ArchiveCommandArgs(
			**self._make_common_args(args),
			profile_path=Path(args.profile),
			output_path=Path(args.file),
			strict=args.strict,
		))
		handler.handle()
