"""Error taxonomy shared by the dispatcher and the AI gateway."""

from typing import Optional


class BFHLError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(BFHLError):
    """Client error; the message is returned to the caller as-is."""

    status_code = 400


class AIGatewayError(BFHLError):
    pass


class AIConfigError(AIGatewayError):
    pass


class AIProviderError(AIGatewayError):
    """Provider answered with a non-2xx status, or could not be reached.

    `provider_status` is None for transport failures and timeouts.
    """

    def __init__(self, provider_status: Optional[int] = None):
        if provider_status is None:
            message = "AI provider unreachable"
        else:
            message = f"AI provider error: {provider_status}"
        super().__init__(message)
        self.provider_status = provider_status
