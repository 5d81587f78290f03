import argparse
import dataclasses
from pathlib import Path

from typing_extensions import override

from dir_archiver.action.scan_profile_action import ScanProfileAction
from dir_archiver.cli import cli_utils
from dir_archiver.cli.cmd import CliCommandHandlerBase, CommonCommandArgs, CliCommandAdapterBase


@dataclasses.dataclass(frozen=True)
class ScanCommandArgs(CommonCommandArgs):
	profile_path: Path


class ScanCommandHandler(CliCommandHandlerBase):
	def __init__(self, args: ScanCommandArgs):
		super().__init__()
		self.args = args

	def handle(self):
		self.init_environment(self.args)
		profile = cli_utils.load_profile(self.args.profile_path)

		scan = ScanProfileAction(profile).run()
		self.logger.info('Profile: {}'.format(profile.name))
		self.logger.info('Common base: {}'.format(scan.base.as_posix()))
		self.logger.info('Directories (count={}):'.format(len(scan.roots)))
		for root in scan.roots:
			self.logger.info('  {}'.format(root.as_posix()))
		self.logger.info('Entries (count={}):'.format(len(scan.entries)))
		for entry in scan.entries:
			self.logger.info('  {}{}'.format(entry.dest, '/' if entry.is_dir else ''))
		self.logger.info('Ignored: {}'.format(scan.result.ignored_count))
		if len(scan.result.failures) > 0:
			self.logger.warning('Failures (count={}):'.format(len(scan.result.failures)))
			cli_utils.log_failures(scan.result)


class ScanCommandAdapter(CliCommandAdapterBase):
	@property
	@override
	def command(self) -> str:
		return 'scan'

	@property
	@override
	def description(self) -> str:
		return 'List what the profile would archive, without writing anything'

	@override
	def build_parser(self, parser: argparse.ArgumentParser):
		self._add_argument_profile(parser)

	@override
	def run(self, args: argparse.Namespace):
		handler = ScanCommandHandler(ScanCommandArgs(
			**self._make_common_args(args),
			profile_path=Path(args.profile),
		))
		handler.handle()
