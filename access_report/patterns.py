"""Access Report - Constants and patterns"""

VERSION = "1.0.0"

# Token schema of an access log line (space separated, no quoting)
MIN_FIELDS = 8
FIELD_REMOTE_ADDRESS = 0
FIELD_REMOTE_USER = 1
FIELD_DATE = 3
FIELD_TIME = 4
FIELD_REQUEST = 5
FIELD_STATUS = 6
FIELD_SIZE = 7
FIELD_REFERER = 8
FIELD_USER_AGENT = 9

# Tried in order against "<date token> <time token>"
TIMESTAMP_FORMATS = (
    '%d.%m.%Y %H:%M:%S%z',
    '%d.%m.%Y %H:%M%z',
    '%d.%m.%Y %H:%M:%S',
    '%d.%m.%Y %H:%M',
)

# Date format of the report bounds
REPORT_DATE_FORMAT = '%d.%m.%Y'

STATUS_NAMES = {
    200: 'OK',
    404: 'Not Found',
    500: 'Internal Server Error',
}
UNKNOWN_STATUS = 'Unknown'


def status_name(status_code: int) -> str:
    return STATUS_NAMES.get(status_code, UNKNOWN_STATUS)


TOP_N = 3

DEFAULT_FILE_LABEL = 'access.log'

HTTP_TIMEOUT = 30

OUTPUT_FORMATS = {
    'markdown': 'markdown',
    'md': 'markdown',
    'adoc': 'adoc',
    'asciidoc': 'adoc',
}
