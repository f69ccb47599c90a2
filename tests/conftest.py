# Ensure the repository root is at sys.path[0] when pytest runs
import json
import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from database import SqlTabularStore  # noqa: E402
from session import RawResponse  # noqa: E402


def json_response(payload, status=200):
    return RawResponse(
        status=status, content_type="application/json", text=json.dumps(payload)
    )


class FakeSession:
    """
    Scripted session. `routes` maps a url substring to a response or a list
    of responses served in order (the last one repeats).
    """

    def __init__(self, routes=None, default=None):
        self.routes = routes or {}
        self.default = default
        self.calls = []
        self.warm_ups = 0
        self.refreshes = 0
        self.closed = False

    def warm_up(self):
        self.warm_ups += 1

    def refresh(self):
        self.refreshes += 1

    def request(self, url, headers=None):
        self.calls.append(url)
        for fragment, response in self.routes.items():
            if fragment in url:
                if isinstance(response, list):
                    return response.pop(0) if len(response) > 1 else response[0]
                return response
        if self.default is not None:
            return self.default
        return RawResponse(status=404, text="not found")

    def close(self):
        self.closed = True


class FakeNotifier:
    def __init__(self):
        self.messages = []

    def notify(self, text):
        self.messages.append(text)
        return True


@pytest.fixture
def sql_store(tmp_path):
    return SqlTabularStore.from_url(f"sqlite:///{tmp_path / 'store.db'}")


@pytest.fixture
def notifier():
    return FakeNotifier()
