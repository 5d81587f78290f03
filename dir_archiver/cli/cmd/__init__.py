import argparse
import dataclasses
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from dir_archiver import logger
from dir_archiver.cli.return_codes import ErrorReturnCodes
from dir_archiver.config.config import Config, set_config_instance


@dataclasses.dataclass(frozen=True)
class CommonCommandArgs:
	config_path: Optional[Path]
	debug: bool


class CliCommandHandlerBase(ABC):
	def __init__(self):
		self.logger: logging.Logger = logger.get()

	@property
	def config(self) -> Config:
		return Config.get()

	# ==================== Utils ====================

	def init_environment(self, args: CommonCommandArgs):
		if args.config_path is not None:
			try:
				config = Config.load(args.config_path)
			except (OSError, ValueError) as e:
				self.logger.error('Failed to load config {!r}: {}'.format(args.config_path.as_posix(), e))
				ErrorReturnCodes.invalid_argument.sys_exit()
		else:
			config = Config.get_default()
		if args.debug:
			config.debug = True
		set_config_instance(config)


class CliCommandAdapterBase(ABC):
	@property
	@abstractmethod
	def command(self) -> str:
		raise NotImplementedError()

	@property
	@abstractmethod
	def description(self) -> str:
		raise NotImplementedError()

	@abstractmethod
	def build_parser(self, parser: argparse.ArgumentParser):
		raise NotImplementedError()

	@abstractmethod
	def run(self, args: argparse.Namespace):
		raise NotImplementedError()

	# ==================== Utils ====================

	@classmethod
	def _add_argument_profile(cls, parser: argparse.ArgumentParser):
		parser.add_argument('-p', '--profile', required=True, help='Path to the profile file, a json object with fields "name", "dirs", "ignores" and optionally "ignore_patterns"')

	@classmethod
	def _make_common_args(cls, args: argparse.Namespace) -> dict:
		return dict(
			config_path=Path(args.config) if args.config is not None else None,
			debug=args.debug,
		)
