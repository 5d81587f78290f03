import functools
from importlib import metadata
from pathlib import Path

from dir_archiver import logger, constants
from dir_archiver.cli.return_codes import ErrorReturnCodes
from dir_archiver.exceptions import ProfileLoadError
from dir_archiver.types.archive_result import ArchiveResult
from dir_archiver.types.profile import Profile


@functools.lru_cache(None)
def get_version() -> str:
	try:
		return metadata.version(constants.DISTRIBUTION_NAME)
	except metadata.PackageNotFoundError:
		return '?'


def load_profile(profile_path: Path) -> Profile:
	logger.get().info('Loading profile from path {!r}...'.format(profile_path.as_posix()))
	try:
		return Profile.load(profile_path)
	except ProfileLoadError as e:
		logger.get().error('Failed to load profile: {}'.format(e))
		ErrorReturnCodes.invalid_profile.sys_exit()


def log_failures(result: ArchiveResult):
	log = logger.get()
	for failure in result:
		if failure.is_unsupported_entry:
			log.info('  skipped {}'.format(failure.error))
		else:
			log.warning('  {}'.format(failure.error))
