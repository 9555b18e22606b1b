import logging
from collections.abc import Iterable
from typing import Optional

from .configuration import ExtensionKey, RTCSdpConfiguration
from .rtcsessiondescription import RTCSessionDescription
from .sdp import (
    ExtensionKeyValue,
    MediaSection,
    SessionDescription,
    extension_key,
    media_spans,
)

logger = logging.getLogger(__name__)


def restrict_media(
    media: MediaSection,
    codecs: Iterable[int],
    extensions: Iterable[ExtensionKeyValue],
    key: ExtensionKey = ExtensionKey.URI,
) -> None:
    """
    Restrict a media section to the given codecs and header extensions.
    """
    descriptions = dict((codec.payloadType, codec) for codec in media.rtp_codecs)
    for pt in media.strip_codecs(codecs):
        if pt in descriptions:
            logger.debug(
                "m=%s - removing codec %d (%s)", media.kind, pt, descriptions[pt]
            )
        else:
            logger.debug("m=%s - removing codec %d", media.kind, pt)

    for extension in media.remove_extensions(extensions, key):
        logger.debug(
            "m=%s - removing header extension %d (%s)",
            media.kind,
            extension.id,
            extension.uri,
        )


def restrict_session(
    description: SessionDescription,
    reference: SessionDescription,
    configuration: RTCSdpConfiguration,
) -> None:
    """
    Restrict `description` in place to the codecs and header extensions
    of `reference`.
    """
    if not description.media:
        logger.warning("Session description has no media section to restrict")

    key = configuration.extensionKey
    for kind in dict.fromkeys(configuration.restrictedKinds):
        codecs = reference.codecs(kind)
        extensions = {extension_key(x, key) for x in reference.header_extensions(kind)}
        for media in description.media_of_kind(kind):
            restrict_media(media, codecs, extensions, key)

    description.separator = configuration.lineSeparator


def strip_codecs(track: str, codecs: Iterable[int]) -> str:
    """
    Rewrite a media section so that its `m=` line lists exactly `codecs`,
    and remove the `a=rtpmap`, `a=fmtp` and `a=rtcp-fb` lines of the codecs
    which were offered but are no longer listed.
    """
    description = SessionDescription.parse(track)
    if not description.media:
        return track

    description.media[0].strip_codecs(codecs)
    return str(description)


def restrict_to_reference(
    sdp: str, reference: str, configuration: Optional[RTCSdpConfiguration] = None
) -> str:
    """
    Restrict the audio and video sections of `sdp` to the codecs and header
    extensions found in `reference`, typically the offer `sdp` answers.

    :param sdp: The SDP text to restrict.
    :param reference: The SDP text whose codecs and header extensions are kept.
    :param configuration: An optional :class:`RTCSdpConfiguration`.
    """
    if configuration is None:
        configuration = RTCSdpConfiguration()

    description = SessionDescription.parse(sdp)
    restrict_session(description, SessionDescription.parse(reference), configuration)
    return str(description)


def restrict_description(
    description: RTCSessionDescription,
    reference: RTCSessionDescription,
    configuration: Optional[RTCSdpConfiguration] = None,
) -> RTCSessionDescription:
    """
    Same as :func:`restrict_to_reference` for :class:`RTCSessionDescription`
    objects. The type of `description` is kept.
    """
    if description.type == "rollback":
        return description
    if configuration is None:
        configuration = RTCSdpConfiguration()

    parsed = description.parse()
    restrict_session(parsed, reference.parse(), configuration)
    return RTCSessionDescription(sdp=str(parsed), type=description.type)


def inject_attribute(sdp: str, kind: str, index: int, attribute: str) -> str:
    """
    Append `attribute` to the `index`-th media section of the given kind.

    If there is no such media section, `sdp` is returned unchanged. All other
    lines keep their text and their own line ending, the new line takes the
    ending of the last line of the section.
    """
    description = SessionDescription.parse(sdp)
    candidates = description.media_of_kind(kind)
    if index < 0 or index >= len(candidates):
        return sdp

    start, end = media_spans(sdp)[description.media.index(candidates[index])]
    section = sdp[start:end]
    if section.endswith("\r\n"):
        insert = attribute + "\r\n"
    elif section.endswith("\n"):
        insert = attribute + "\n"
    else:
        insert = description.separator + attribute
    return sdp[:end] + insert + sdp[end:]
