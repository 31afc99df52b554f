"""All magic values live here — no inline literals anywhere else."""

# Source types accepted in a transcription request
SOURCE_URL = "url"
SOURCE_FILE = "file"

# Inbound request keys
FIELD_SOURCE_TYPE = "sourceType"
FIELD_URL = "url"
FIELD_PATH = "path"
FIELD_PROMPT = "prompt"
FIELD_CONTENT = "content"
FIELD_FILENAME = "filename"
FIELD_BODY = "body"
FIELD_INPUT = "input"

# OpenAI Whisper provider
OPENAI_BASE_URL = "https://api.openai.com/v1"
WHISPER_MODEL = "whisper-1"
RESPONSE_FORMAT = "json"

# Media defaults
DEFAULT_FILENAME = "media"
DEFAULT_MIME_TYPE = "application/octet-stream"

# Timeouts (seconds). The provider call is bounded; a hung upload fails as unreachable.
DEFAULT_FETCH_TIMEOUT: float = 60.0
DEFAULT_PROVIDER_TIMEOUT: float = 300.0

# HTTP server
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4111
SERVICE_NAME = "video-transcriber"

# Workflow
WORKFLOW_ID = "video-transcription-workflow"
STEP_TRANSCRIBE_ID = "transcribe-video"
STEP_TRANSCRIBE_DESCRIPTION = (
    "Transcribes spoken audio from a video source using OpenAI Whisper."
)

# Log messages
MSG_SERVICE_STARTING = "Starting transcription service on %s:%d…"
MSG_KEY_MISSING = "OPENAI_API_KEY is not set — every transcription will fail"
MSG_STAGE = "Request %s → %s"
MSG_FETCHING = "Fetching media from %s"
MSG_READING = "Reading media from %s"
MSG_ACQUIRED = "Acquired %d bytes (%s, %s)"
MSG_UPLOADING = "Uploading %d bytes to Whisper"
MSG_TRANSCRIBED = "✓ Transcribed %d chars (%.1fs)"
MSG_REQUEST_REJECTED = "✗ Rejected request: %s"
MSG_REQUEST_FAILED = "✗ Transcription failed (%s): %s"
MSG_UNHANDLED = "✗ Unhandled error while transcribing"
MSG_WORKFLOW_STEP = "Workflow %s → step %s"

# Error messages
MSG_ERR_INVALID_REQUEST = "Invalid request data"
MSG_ERR_BODY_NOT_OBJECT = "Request body must be a JSON object"
MSG_ERR_SOURCE_TYPE = "sourceType must be one of: url, file"
MSG_ERR_URL_REQUIRED = "URL is required for url sourceType"
MSG_ERR_URL_INVALID = "Please enter a valid URL"
MSG_ERR_PATH_REQUIRED = "path is required for file sourceType"
MSG_ERR_PATH_CONFLICT = "path must not be set for url sourceType"
MSG_ERR_URL_CONFLICT = "url must not be set for file sourceType"
MSG_ERR_PROMPT_TYPE = "prompt must be a string"
MSG_ERR_INPUT_REQUIRED = "Video transcription input is required."
MSG_ERR_FETCH_STATUS = "Failed to fetch media (HTTP %d %s)"
MSG_ERR_FETCH_TRANSPORT = "Failed to fetch media: %s"
MSG_ERR_NOT_FOUND = "Media file not found: %s"
MSG_ERR_NOT_READABLE = "Media file could not be read: %s"
MSG_ERR_MISCONFIGURED = "OPENAI_API_KEY environment variable is not configured."
MSG_ERR_UPSTREAM = "OpenAI transcription failed: %s"
MSG_ERR_UNREACHABLE = "OpenAI transcription request failed: %s"
MSG_ERR_UNPARSEABLE = "Unable to parse transcription response."
MSG_ERR_INTERNAL = "Failed to transcribe video"

# CLI output
MSG_CLI_SAVED = "Transcript saved to %s"
