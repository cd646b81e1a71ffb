"""Error kinds raised by the aggregation core.

Each error carries the HTTP status the API layer answers with when the error
is fatal for a request. Per-field failures inside ``/api/fetch`` never reach
that mapping; they are folded into inline error descriptors instead.
"""

from __future__ import annotations


class TubeBridgeError(RuntimeError):
    """Base class for every failure the service knows how to report."""

    status_code = 500


class MissingParameter(TubeBridgeError):
    status_code = 400


class NoTarget(TubeBridgeError):
    """No video id, channel id or search query was supplied."""

    status_code = 400


class NoFields(TubeBridgeError):
    """Identifiers were supplied but none of the requested fields applies."""

    status_code = 400


class UpstreamNotFound(TubeBridgeError):
    status_code = 404


class InvalidVideo(UpstreamNotFound):
    """The upstream answered but flagged the video as unavailable."""


class NoCaptions(TubeBridgeError):
    status_code = 404


class UnrecognizedFormat(TubeBridgeError):
    status_code = 422


class TranscriptParseError(UnrecognizedFormat):
    """A caption document looked like WebVTT but a cue timestamp was malformed."""


class UpstreamUnavailable(TubeBridgeError):
    status_code = 500


class WebSearchNotConfigured(TubeBridgeError):
    status_code = 503
