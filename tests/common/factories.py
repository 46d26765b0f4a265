"""
Factories for PANClient tests.

Response documents as a device returns them, and a transport double that
records every request instead of sending it.
"""

FW_DEVICE = "/config/devices/entry[@name='localhost.localdomain']"
FW_VSYS = FW_DEVICE + "/vsys/entry[@name='vsys1']"
PANORAMA_SHARED = "/config/shared"
PANORAMA_MGT = "/config/mgt-config"


def dg_path(name):
    """Base path of a Panorama device-group."""
    return f"{FW_DEVICE}/device-group/entry[@name='{name}']"


SUCCESS_XML = b'<response status="success" code="20"><msg>command succeeded</msg></response>'


def result_xml(inner, status="success"):
    """Wrap result content in a response document."""
    return f'<response status="{status}"><result>{inner}</result></response>'.encode("utf-8")


def error_xml(code, message):
    """Build an error response document."""
    return f'<response status="error" code="{code}"><msg><line>{message}</line></msg></response>'.encode("utf-8")


FIREWALL_SYSTEM_INFO = result_xml(
    "<system>"
    "<hostname>fw01</hostname>"
    "<model>PA-850</model>"
    "<serial>012801000001</serial>"
    "<sw-version>10.1.6</sw-version>"
    "<platform-family>800</platform-family>"
    "</system>"
)

PANORAMA_SYSTEM_INFO = result_xml(
    "<system>"
    "<hostname>pano01</hostname>"
    "<model>Panorama</model>"
    "<serial>000702000001</serial>"
    "<sw-version>10.2.3</sw-version>"
    "<platform-family>m</platform-family>"
    "</system>"
)


class FakeTransport:
    """
    Transport double that records every call.

    Queued responses are returned in order; once the queue is empty every
    call receives the default success response. An exception in the queue is
    raised instead of returned.
    """

    def __init__(self, responses=None, default=SUCCESS_XML):
        self.responses = list(responses or [])
        self.default = default
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)
        return self

    def send(self, method, params):
        self.calls.append((method, dict(params)))
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return self.default

    @property
    def last_method(self):
        return self.calls[-1][0]

    @property
    def last_params(self):
        return self.calls[-1][1]

    def params(self, index):
        return self.calls[index][1]
