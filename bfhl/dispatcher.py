"""Request dispatch for `POST /bfhl`.

A decoded body is turned into exactly one `Operation` by `parse_request`, which
is the only place that inspects request keys. `Dispatcher.execute` routes the
operation to the numeric library or the AI gateway, and `Dispatcher.handle`
maps the outcome onto a status code and an `Envelope`:

- `InvalidRequest` -> 400 with its message unchanged.
- anything else (AI config/provider failures included) -> 500
  "Internal server error"; the cause is only logged.
"""

from enum import Enum
from typing import Any, Optional, Tuple

import structlog
from pydantic import BaseModel, ConfigDict

from bfhl import envelope, numeric
from bfhl.ai_gateway import AIGateway
from bfhl.config import Settings
from bfhl.envelope import Envelope
from bfhl.errors import InvalidRequest
from bfhl.validation import (
    validate_array,
    validate_fibonacci,
    validate_question,
)

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class OperationKind(str, Enum):
    FIBONACCI = "fibonacci"
    PRIME = "prime"
    LCM = "lcm"
    HCF = "hcf"
    AI = "AI"


class Operation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    value: Any


def _check(error: Optional[str]) -> None:
    if error is not None:
        raise InvalidRequest(error)


def parse_request(body: Any, settings: Settings) -> Operation:
    """Validate `body` and return the single operation it requests.

    Raises `InvalidRequest` when the body is not an object, when it carries
    zero or several recognized keys, or when the value fails its bound checks.
    Integral floats are normalised to ``int`` and the AI question is trimmed.
    """
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise InvalidRequest("request body must be a JSON object")

    active = [kind for kind in OperationKind if kind.value in body]
    if len(active) != 1:
        raise InvalidRequest("request must contain exactly one key")

    kind = active[0]
    raw = body[kind.value]

    if kind is OperationKind.FIBONACCI:
        _check(validate_fibonacci(raw, settings))
        value = int(raw)
    elif kind is OperationKind.AI:
        _check(validate_question(raw, settings))
        value = raw.strip()
    else:
        _check(validate_array(raw, settings, kind.value))
        value = [int(x) for x in raw]

    return Operation(kind=kind, value=value)


class Dispatcher:
    def __init__(self, settings: Settings, gateway: AIGateway):
        self.settings = settings
        self.gateway = gateway

    def execute(self, operation: Operation) -> Any:
        kind, value = operation.kind, operation.value
        if kind is OperationKind.FIBONACCI:
            return numeric.fibonacci_series(value)
        if kind is OperationKind.PRIME:
            return numeric.filter_primes(value)
        if kind is OperationKind.LCM:
            return numeric.lcm_of_list(value)
        if kind is OperationKind.HCF:
            return numeric.hcf_of_list(value)
        return self.gateway.ask(value)

    def handle(self, body: Any) -> Tuple[int, Envelope]:
        email = self.settings.official_email
        try:
            operation = parse_request(body, self.settings)
            logger.info("Dispatching operation", operation=operation.kind.value)
            data = self.execute(operation)
        except InvalidRequest as exc:
            logger.warning("Rejected request", error=exc.message)
            return exc.status_code, envelope.failure(email, exc.message)
        except Exception:
            logger.exception("Operation failed")
            return 500, envelope.failure(email, INTERNAL_ERROR_MESSAGE)
        return 200, envelope.success(email, data)
