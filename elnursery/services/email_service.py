"""Transactional email through the Mailgun HTTP API"""

import json
from typing import Any, Dict

import requests
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..models.principal import PrincipalType
from ..utils.config import EmailSettings
from ..utils.exceptions import NotificationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

ACCOUNT_CREDENTIALS_TEMPLATE = "account_credentials"
RESET_PASSWORD_TEMPLATE = "reset_password"


class EmailService:
    """Sends templated messages; raises NotificationError when delivery fails"""

    def __init__(self, settings: EmailSettings):
        self.settings = settings

    @property
    def messages_url(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/{self.settings.domain}/messages"

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type(requests.exceptions.RequestException),
    )
    def _post(self, data: Dict[str, Any]) -> requests.Response:
        response = requests.post(
            self.messages_url,
            auth=("api", self.settings.api_key),
            data=data,
            timeout=self.settings.timeout_seconds,
        )
        if response.status_code >= 500:
            # Server-side failures are retried; 4xx are not
            response.raise_for_status()
        return response

    def send(self, to: str, subject: str, template: str, variables: Dict[str, Any]) -> None:
        if not self.settings.api_key or not self.settings.domain:
            raise NotificationError("Email delivery is not configured")

        data = {
            "from": f"{self.settings.sender} <noreply@{self.settings.domain}>",
            "to": to,
            "subject": subject,
            "template": template,
            "h:X-Mailgun-Variables": json.dumps(variables),
        }
        try:
            response = self._post(data)
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error("Email delivery failed", template=template, error=str(cause))
            raise NotificationError(f"Email delivery failed: {cause}") from e

        if response.status_code >= 400:
            logger.error(
                "Email rejected by provider",
                template=template,
                status_code=response.status_code,
            )
            raise NotificationError(
                f"Email rejected by provider: {response.text}",
                status_code=response.status_code,
            )
        logger.info("Email sent", template=template)

    def send_account_credentials(
        self, email: str, name: str, password: str, principal_type: PrincipalType
    ) -> None:
        """Deliver the generated password of a newly created account"""
        self.send(
            to=email,
            subject="Your Elnursery account",
            template=ACCOUNT_CREDENTIALS_TEMPLATE,
            variables={
                "name": name,
                "email": email,
                "password": password,
                "account_type": principal_type.value,
            },
        )

    def send_reset_code(self, email: str, name: str, code: int) -> None:
        self.send(
            to=email,
            subject="Reset your password",
            template=RESET_PASSWORD_TEMPLATE,
            variables={"name": name, "code": code},
        )
