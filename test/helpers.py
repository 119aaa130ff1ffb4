import json

import httpx

PUSH_URL = "https://push.test/--/api/v2/push/send"


def make_request(token: str, title: str = "t", body: str = "b", data=None) -> dict:
    return {
        "token": token,
        "notificationData": {"title": title, "body": body, "data": data if data is not None else {}},
    }


class FakeExpo:
    """Records posted payloads and answers with the status configured per token.

    A status may also be an exception instance, which is raised as a transport error.
    """

    def __init__(self, statuses=None, default_status=200):
        self.statuses = statuses or {}
        self.default_status = default_status
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(request)
        status = self.statuses.get(payload["to"], self.default_status)
        if isinstance(status, Exception):
            raise status
        return httpx.Response(status, json={"data": {"status": "ok", "id": f"ticket-{payload['to']}"}})

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)
