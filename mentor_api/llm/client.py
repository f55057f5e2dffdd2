"""Transport client for the text-generation provider.

Architectural role:
    Executes one HTTP request against the provider's Responses endpoint and
    classifies every failure into the pipeline error taxonomy.

Model invocation flow:
    `service.generate_feedback` -> `send_request(payload, settings)` -> parsed JSON body.

Retry behavior:
    No retry loop is implemented. Each call is attempted once with the configured
    timeout (20 seconds by default).

Failure handling model:
    - Missing credential -> `MisconfiguredError`, raised before any network I/O.
    - Error status with a JSON object body -> `ProviderRejectedError` carrying that body.
    - Network errors, timeouts, non-JSON or non-object bodies -> `InternalFailureError`.
    Raw exception text is logged but never placed in client-facing messages.
"""

import logging
from typing import Any, Optional

import requests

from mentor_api.core.errors import InternalFailureError, MisconfiguredError, ProviderRejectedError
from mentor_api.llm.provider_config import ProviderSettings


logger = logging.getLogger(__name__)


def _decode_json(response) -> Any:
    """Return the decoded JSON body, or raise `InternalFailureError`."""
    try:
        return response.json()
    except ValueError as err:
        raise InternalFailureError(
            f"Provider returned a non-JSON body (status {response.status_code})"
        ) from err


def send_request(payload: dict, settings: ProviderSettings, http: Optional[Any] = None) -> dict:
    """Send one request to the provider and return its decoded JSON body.

    Args:
        payload: Provider request body (`model`, `input`, `max_output_tokens`).
        settings: Provider settings holding the credential, URL, and timeout.
        http: Object exposing `post(url, headers=..., json=..., timeout=...)`.
            Defaults to the `requests` module; tests inject a fake.

    Returns:
        Decoded JSON object from a successful (2xx) response.

    Raises:
        MisconfiguredError: `settings.api_key` is not set.
        ProviderRejectedError: Provider returned an error status with a JSON body.
        InternalFailureError: Any transport or decoding failure.
    """
    if not settings.api_key:
        raise MisconfiguredError(settings.api_key_name)

    http = http or requests

    headers = {
        "Authorization": f"Bearer {settings.api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = http.post(
            settings.responses_url,
            headers=headers,
            json=payload,
            timeout=settings.timeout,
        )
    except requests.exceptions.Timeout as err:
        logger.error("Provider request timed out after %.1fs", settings.timeout)
        raise InternalFailureError("Provider request timed out") from err
    except requests.exceptions.RequestException as err:
        logger.error("Provider request failed: %s", err.__class__.__name__)
        raise InternalFailureError("Provider request failed") from err

    if not 200 <= response.status_code < 300:
        details = _decode_json(response)
        if not isinstance(details, dict):
            raise InternalFailureError(
                f"Provider error body is not an object (status {response.status_code})"
            )
        logger.warning("Provider rejected request with status %d", response.status_code)
        raise ProviderRejectedError(response.status_code, details)

    data = _decode_json(response)
    if not isinstance(data, dict):
        raise InternalFailureError("Provider response body is not an object")

    return data
