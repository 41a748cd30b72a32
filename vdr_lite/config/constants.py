"""Processing limits shared by the pipeline components."""

MAX_FILE_SIZE_BYTES = 25 * 1024 * 1024
MAX_FILES = 50
MAX_TEXT_LENGTH = 15000
MAX_TABULAR_ROWS = 200
CLASSIFIER_SNIPPET_LENGTH = 300
MAX_CONCURRENT_FILES = 10

SUPPORTED_FILE_TYPES: tuple[str, ...] = ("pdf", "docx", "xlsx", "csv", "txt")

DOC_MAX_TOKENS = 700
SUMMARY_MAX_TOKENS = 700
SUMMARY_MIN_WORDS = 300
SUMMARY_MAX_WORDS = 400

DOC_TIMEOUT_SECONDS = 30.0
SUMMARY_TIMEOUT_SECONDS = 20.0
TOTAL_TIMEOUT_SECONDS = 180.0

RETRY_MAX_ATTEMPTS = 5
RETRY_BASE_DELAY_SECONDS = 1.0
RETRY_MAX_DELAY_SECONDS = 30.0
