PROGRAM_ID = 'dir_archiver'
PROGRAM_NAME = 'Directory Archiver'
DISTRIBUTION_NAME = 'dir-archiver'

# archive related
DEFAULT_ARCHIVE_COMMENT_FORMAT = PROGRAM_NAME + ' [{name}]'
ZIP_COMMENT_MAX_LENGTH = 65535
