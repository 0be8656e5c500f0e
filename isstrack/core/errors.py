"""
Error taxonomy for the tracker.

Data-availability problems (transport, parse) are absorbed by the element
fetcher's fallback. Propagation problems reach the client as a 500 with a
stable code, rate limiting as a 429.
"""


class TrackerError(Exception):
    code = "tracker_error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class TransportError(TrackerError):
    """The remote TLE provider could not be reached or returned an error status"""
    code = "transport_failed"


class ParseError(TrackerError):
    """The provider response did not have the expected shape"""
    code = "parse_failed"


class PropagationError(TrackerError):
    """Element set could not be parsed or propagated to the requested time"""
    code = "propagation_failed"


class RateLimitExceeded(TrackerError):
    code = "rate_limited"

    def __init__(self, route: str):
        super().__init__(f"rate limit exceeded for {route}")
        self.route = route
