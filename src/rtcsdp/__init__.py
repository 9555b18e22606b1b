# ruff: noqa: F401
import logging

from .configuration import ExtensionKey, RTCSdpConfiguration
from .rewrite import (
    inject_attribute,
    restrict_description,
    restrict_to_reference,
    strip_codecs,
)
from .rtcrtpparameters import (
    RTCRtcpFeedback,
    RTCRtpCodecParameters,
    RTCRtpHeaderExtensionParameters,
)
from .rtcsessiondescription import RTCSessionDescription
from .sdp import (
    MediaSection,
    SessionDescription,
    codecs_for_modality,
    codecs_of_track,
    extensions_for_modality,
    extensions_of_track,
    remove_lines,
    split_tracks,
)

__version__ = "1.0.0"

# Set default logging handler to avoid "No handler found" warnings.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ExtensionKey",
    "MediaSection",
    "RTCRtcpFeedback",
    "RTCRtpCodecParameters",
    "RTCRtpHeaderExtensionParameters",
    "RTCSdpConfiguration",
    "RTCSessionDescription",
    "SessionDescription",
    "codecs_for_modality",
    "codecs_of_track",
    "extensions_for_modality",
    "extensions_of_track",
    "inject_attribute",
    "remove_lines",
    "restrict_description",
    "restrict_to_reference",
    "split_tracks",
    "strip_codecs",
]
