from dataclasses import dataclass
from logging import Logger
from time import monotonic
from typing import Optional

import requests

from app.errors import ServiceUnavailableError
from app.pii import PiiSsn


@dataclass(frozen=True)
class SsnValidationResult:
    valid: bool
    error: Optional[str] = None


class SsnAuthorityClient:
    """
    Confirms SSNs with the external validation authority.  Exactly one request is made per
    call.  Semantic rejections are returned as results; anything that prevents a coherent
    answer raises ServiceUnavailableError.
    """

    VALIDATE_PATH = '/api/v1/ssn/validate'
    INVALID_MESSAGE = 'Invalid SSN'
    INVALID_FORMAT_MESSAGE = 'Invalid SSN format'
    # Client errors that describe the transport, not the SSN
    TRANSIENT_CLIENT_ERROR_CODES = (408, 429)

    def init_app(
        self,
        url: str,
        logger: Logger,
        connect_timeout: float = 5,
        read_timeout: float = 5,
    ):
        if not url:
            raise ValueError('SSN_AUTHORITY_URL must be configured to validate SSNs')

        self.base_url = url.rstrip('/')
        self.logger = logger
        self.timeout = (connect_timeout, read_timeout)

    def validate(
        self,
        ssn: str,
    ) -> SsnValidationResult:
        """Ask the authority whether the SSN is valid.

        Args:
            ssn (str): An SSN that already passed the XXX-XX-XXXX format check

        Raises:
            ServiceUnavailableError: The authority was unreachable, timed out, or answered incoherently
        """
        start_time = monotonic()
        try:
            response = requests.post(f'{self.base_url}{self.VALIDATE_PATH}', json={'ssn': ssn}, timeout=self.timeout)
        except requests.Timeout as e:
            self.logger.warning('Timeout raised validating %s', PiiSsn(ssn))
            raise ServiceUnavailableError('SSN validation service timed out') from e
        except requests.RequestException as e:
            self.logger.warning('%s raised validating %s', type(e).__name__, PiiSsn(ssn))
            raise ServiceUnavailableError(f'SSN validation service is unavailable: {type(e).__name__}') from e
        finally:
            self.logger.debug('SSN authority request time: %s', monotonic() - start_time)

        return self._handle_response(response)

    def _handle_response(
        self,
        response: requests.Response,
    ) -> SsnValidationResult:
        if 200 <= response.status_code < 300:
            data = self._parse_json(response)
            if data is None:
                raise ServiceUnavailableError(f'Invalid JSON response from SSN validation service: {response.status_code}')

            if data.get('valid') is True:
                return SsnValidationResult(valid=True)
            return SsnValidationResult(valid=False, error=self._error_message(data, self.INVALID_MESSAGE))

        if 400 <= response.status_code < 500 and response.status_code not in self.TRANSIENT_CLIENT_ERROR_CODES:
            data = self._parse_json(response)
            if data is None:
                return SsnValidationResult(valid=False, error=self.INVALID_FORMAT_MESSAGE)
            return SsnValidationResult(valid=False, error=self._error_message(data, self.INVALID_FORMAT_MESSAGE))

        raise ServiceUnavailableError(f'Unexpected response code: {response.status_code}')

    def _parse_json(
        self,
        response: requests.Response,
    ) -> Optional[dict]:
        try:
            data = response.json()
        except ValueError:
            self.logger.warning('Received a garbled response from the SSN authority: %s', response.status_code)
            return None

        if not isinstance(data, dict):
            self.logger.warning('Received a non-object response from the SSN authority: %s', response.status_code)
            return None

        return data

    @staticmethod
    def _error_message(
        data: dict,
        default: str,
    ) -> str:
        """Prefer the errors list, then the legacy errorMessage field."""
        errors = data.get('errors')
        if isinstance(errors, list) and errors:
            return ', '.join(str(error) for error in errors)

        if data.get('errorMessage'):
            return str(data['errorMessage'])

        return default
