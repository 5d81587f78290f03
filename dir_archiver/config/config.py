import functools
import json
import logging
from pathlib import Path
from typing import Optional

from mcdreforged.api.utils import Serializable

from dir_archiver.config.archive_config import ArchiveConfig


class Config(Serializable):
	debug: bool = False

	archive: ArchiveConfig = ArchiveConfig()

	# ==================== Instance getters ====================

	@classmethod
	@functools.lru_cache
	def __get_default(cls) -> 'Config':
		return Config.get_default()

	@classmethod
	def get(cls) -> 'Config':
		if _config is None:
			return cls.__get_default()
		return _config

	@classmethod
	def load(cls, path: Path) -> 'Config':
		"""
		:raise OSError: the file cannot be read
		:raise ValueError: the file content is not a valid config
		"""
		with open(path, 'r', encoding='utf8') as f:
			data = json.load(f)
		try:
			config = cls.deserialize(data)
		except (TypeError, KeyError) as e:
			raise ValueError(str(e)) from None
		config.archive.validate()
		return config


_config: Optional[Config] = None


def set_config_instance(cfg: Optional[Config]):
	global _config
	_config = cfg

	from dir_archiver import logger
	if cfg is not None and cfg.debug:
		logger.get().setLevel(logging.DEBUG)
		logger.get().debug('debug on')
	else:
		from dir_archiver.utils.log_utils import get_log_level
		logger.get().setLevel(get_log_level())
