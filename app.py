"""Flask JSON API around the address-list parser."""

import logging

from flask import Flask, jsonify, request

from address_parser.encoding_utils import decode_display_name
from address_parser.parser import (
    STRICT,
    available_strategies,
    inspect_addresses,
)
from address_parser.validation import validate_address
import config

logger = logging.getLogger(__name__)

app = Flask(__name__)


def _as_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _request_params():
    """Merge JSON body (if any) over the query string."""
    params = dict(request.args)
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        params.update(body)
    return params


def _error(message, status):
    logger.info("Rejected %s %s: %s", request.method, request.path, message)
    return jsonify({"error": message}), status


@app.route("/api/parse", methods=["GET", "POST"])
def api_parse():
    params = _request_params()
    text = params.get("addresses", params.get("q"))
    if text is None:
        return _error("No address list provided", 400)
    if not isinstance(text, str):
        return _error("Address list must be a string", 400)
    if len(text) > config.MAX_INPUT_LENGTH:
        return _error("Address list too long", 413)

    use_strict = _as_bool(params.get("strict"), config.DEFAULT_STRATEGY == STRICT)
    decode = _as_bool(params.get("decode"), config.DECODE_NAMES)
    details = _as_bool(params.get("details"))
    pattern = params.get("pattern", config.VALIDATION_PATTERN)
    if not isinstance(pattern, str):
        return _error("Validation pattern must be a string", 400)

    try:
        candidates = inspect_addresses(
            text,
            use_strict=use_strict,
            decoder=decode_display_name if decode else None,
            pattern=pattern,
        )
    except ValueError as e:
        return _error(str(e), 400)

    if details:
        results = [c.to_dict() for c in candidates]
    else:
        results = [c.to_entry().to_dict() for c in candidates if c.is_valid]

    return jsonify({
        "strategy": STRICT if use_strict else "native",
        "decoded": decode,
        "results": results,
    })


@app.route("/api/validate")
def api_validate():
    address = request.args.get("address", "")
    pattern = request.args.get("pattern", config.VALIDATION_PATTERN)
    try:
        valid = validate_address(address, pattern)
    except ValueError as e:
        return _error(str(e), 400)
    return jsonify({"address": address, "pattern": pattern, "valid": valid})


@app.route("/api/strategies")
def api_strategies():
    return jsonify({
        "strategies": available_strategies(),
        "default": config.DEFAULT_STRATEGY,
        "decode_names": config.DECODE_NAMES,
    })


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    app.run(debug=True, host="0.0.0.0", port=5000)
