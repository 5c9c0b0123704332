import json

import pytest

import resourceful as rf


class MockHTTP(object):
    """an HTTP client returning canned responses by url and params"""

    def __init__(self, responses=None):
        self.responses = {} if responses is None else responses
        self.requests = []

    def send(self, req):
        self.requests.append(req)
        return self.responses[req.url, tuple(sorted(req.params.items()))]

    def add_json(self, url, obj, status_code=200, **params):
        self.responses[url, tuple(sorted(params.items()))] = rf.http.Response(
            status_code, json.dumps(obj).encode())


rf.send.register(MockHTTP, MockHTTP.send)


def _link(type_, id_):
    return {"sys": {"type": "Link", "linkType": type_, "id": id_}}


def _locale(id="0X5xcjckv6RMrd9Trae81p", name="Polish", code="pl",
            version=1):
    return {
        "sys": {
            "type": "Locale",
            "id": id,
            "version": version,
            "space": _link("Space", "n6spjc167pc2"),
            "createdAt": "2014-06-10T17:25:29Z",
            "updatedAt": "2014-06-10T17:25:29.123Z",
        },
        "name": name,
        "code": code,
        "default": False,
    }


@pytest.fixture
def mock_http():
    return MockHTTP()


@pytest.fixture
def make_locale():
    return _locale


@pytest.fixture
def locale_raw():
    return _locale()


@pytest.fixture
def array_raw():
    return {
        "sys": {"type": "Array"},
        "total": 6,
        "skip": 0,
        "limit": 25,
        "items": [
            _locale(id="loc{}".format(i), name="Locale {}".format(i))
            for i in range(5)
        ],
    }
