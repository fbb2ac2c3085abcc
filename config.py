import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


DEFAULT_STRATEGY = os.environ.get("ADDRESS_PARSER_STRATEGY", "native")
DECODE_NAMES = _env_flag("ADDRESS_PARSER_DECODE_NAMES", True)
VALIDATION_PATTERN = os.environ.get("ADDRESS_PARSER_VALIDATOR", "default")
MAX_INPUT_LENGTH = int(os.environ.get("ADDRESS_PARSER_MAX_INPUT", 64 * 1024))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
