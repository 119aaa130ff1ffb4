import logging
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import ValidationError

from .config import Settings, settings as default_settings
from .schemas import NotificationOutcome, NotificationRequest

logger = logging.getLogger(__name__)


class ExpoPushClient:
    """Async client for the Expo push-delivery endpoint.

    One instance is opened per invocation and shared by every send in it:

        async with ExpoPushClient() as client:
            outcome = await client.send_notification(request)
    """

    def __init__(self,
                 settings: Optional[Settings] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the push client.

        Args:
            settings: Configuration to use (defaults to the module settings)
            transport: Optional httpx transport, used to fake the endpoint in tests
        """
        self.settings = settings or default_settings
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.settings.expo_access_token:
            headers["Authorization"] = f"Bearer {self.settings.expo_access_token}"
        return headers

    async def __aenter__(self) -> "ExpoPushClient":
        self._client = httpx.AsyncClient(
            headers=self.headers,
            timeout=self.settings.request_timeout_seconds,
            transport=self.transport
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_payload(self, request: NotificationRequest) -> Dict[str, Any]:
        content = request.notificationData
        payload = {
            "to": request.token,
            "title": content.title,
            "body": content.body,
            "priority": self.settings.notification_priority,
        }
        # Expo rejects a null data field; leave it out instead
        if content.data is not None:
            payload["data"] = content.data
        return payload

    async def send_notification(
            self,
            request: Union[NotificationRequest, Dict[str, Any]]) -> NotificationOutcome:
        """
        Send a notification to a single recipient.

        Never raises for delivery problems: transport errors, timeouts, non-2xx
        replies and malformed requests all come back as a failed outcome.

        Args:
            request: The notification request, or the raw event item for one

        Returns:
            NotificationOutcome with the parsed response or the error string
        """
        if self._client is None:
            raise RuntimeError("ExpoPushClient must be used inside 'async with'")

        try:
            if not isinstance(request, NotificationRequest):
                request = NotificationRequest.model_validate(request)

            response = await self._client.post(
                self.settings.expo_push_url,
                json=self.build_payload(request)
            )
            response.raise_for_status()

            try:
                response_data = response.json()
            except ValueError:
                response_data = response.text

            logger.info(f"Notification sent successfully: {response_data}")
            return NotificationOutcome(success=True, response=response_data)

        except (httpx.HTTPError, ValidationError) as e:
            error = str(e) or type(e).__name__
            logger.error(f"Failed to send notification: {error}")
            return NotificationOutcome(success=False, error=error)
        except Exception as e:
            logger.error(f"Unexpected error sending notification: {str(e)}")
            return NotificationOutcome(success=False, error=str(e) or type(e).__name__)
