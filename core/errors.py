"""
Error Taxonomy

Every failure a request can hit maps to one of these classes. The status code
travels with the exception so the application handlers can turn it into a
uniform {"error": message} payload.
"""


class PodCuriousError(Exception):
    """Base class for all service errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(PodCuriousError):
    """A required request field is missing or malformed"""

    status_code = 400


class ExtractionError(InputError):
    """The shared link could not be turned into an identifiable episode"""


class UpstreamError(PodCuriousError):
    """A third-party service failed or answered with something unusable"""


class FetchError(UpstreamError):
    """Fetching a web page failed"""


class RedirectLoopError(FetchError):
    """Redirect chain exceeded the hop limit"""


class FetchTimeoutError(FetchError, TimeoutError):
    """Page fetch exceeded the socket timeout"""


class ParseError(PodCuriousError):
    """Model or provider output was not valid JSON"""
