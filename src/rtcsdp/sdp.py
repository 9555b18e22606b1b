import re
from collections.abc import Callable, Iterable, Iterator
from typing import Optional, Union

from .configuration import ExtensionKey
from .rtcrtpparameters import (
    ParametersDict,
    RTCRtcpFeedback,
    RTCRtpCodecParameters,
    RTCRtpHeaderExtensionParameters,
)

# attributes whose value starts with a payload type
CODEC_ATTRIBUTES = ["fmtp", "rtcp-fb", "rtpmap"]

FMTP_INT_PARAMETERS = [
    "apt",
    "max-fr",
    "max-fs",
    "maxplaybackrate",
    "minptime",
    "stereo",
    "useinbandfec",
]

MEDIA_LINE_RE = re.compile(r"^m=(\S+)\s+([0-9]+(?:/[0-9]+)?)\s+(\S+)((?:\s+\S+)*)\s*$")
NUMBER_RE = re.compile(r"^[0-9]+$")

ExtensionKeyValue = Union[int, str]
LinePattern = Union[str, re.Pattern]


def is_number(value: str) -> bool:
    return NUMBER_RE.match(value) is not None


def grouplines(sdp: str) -> tuple[list[str], list[list[str]]]:
    session = []
    media = []
    for line in sdp.split("\n"):
        if line.startswith("m="):
            media.append([line])
        elif len(media):
            media[-1].append(line)
        else:
            session.append(line)
    return session, media


def parse_attr(line: str) -> tuple[str, Optional[str]]:
    if ":" in line:
        bits = line[2:].split(":", 1)
        return bits[0], bits[1]
    else:
        return line[2:], None


def parameters_from_sdp(sdp: str) -> ParametersDict:
    parameters: ParametersDict = {}
    for param in sdp.split(";"):
        param = param.strip()
        if "=" in param:
            k, v = param.split("=", 1)
            if k in FMTP_INT_PARAMETERS and is_number(v):
                parameters[k] = int(v)
            else:
                parameters[k] = v
        elif param:
            parameters[param] = None
    return parameters


def payload_type_from_sdp(value: Optional[str]) -> Optional[int]:
    """
    Return the payload type an `a=rtpmap`, `a=fmtp` or `a=rtcp-fb` value
    refers to, or `None` for wildcards and malformed values.
    """
    bits = value.split(maxsplit=1) if value else []
    if bits and is_number(bits[0]):
        return int(bits[0])
    return None


def extmap_from_sdp(value: Optional[str]) -> Optional[RTCRtpHeaderExtensionParameters]:
    bits = value.split() if value else []
    if len(bits) < 2:
        return None

    ext_id, ext_direction = bits[0], None
    if "/" in ext_id:
        ext_id, ext_direction = ext_id.split("/", 1)
    if not is_number(ext_id):
        return None

    return RTCRtpHeaderExtensionParameters(
        id=int(ext_id), uri=bits[1], direction=ext_direction
    )


def extension_key(
    extension: RTCRtpHeaderExtensionParameters, key: ExtensionKey
) -> ExtensionKeyValue:
    if key == ExtensionKey.ID:
        return extension.id
    return extension.uri


def extensions_from_lines(
    lines: Iterable[str],
) -> list[RTCRtpHeaderExtensionParameters]:
    extensions = []
    for line in lines:
        if line.startswith("a="):
            attr, value = parse_attr(line)
            if attr == "extmap":
                extension = extmap_from_sdp(value)
                if extension is not None:
                    extensions.append(extension)
    return extensions


def normalize_lines(sdp: str) -> tuple[str, bool]:
    """
    Convert line endings to LF and strip the final line ending.

    Returns the converted text and whether it was terminated by a line ending.
    """
    text = sdp.replace("\r\n", "\n")
    if text.endswith("\n"):
        return text[:-1], True
    return text, False


def media_spans(sdp: str) -> list[tuple[int, int]]:
    """
    Return the `(start, end)` offsets of each media section in the raw text,
    line endings included.
    """
    starts = [
        match.start()
        for match in re.finditer(r"[^\n]*\n|[^\n]+$", sdp)
        if match.group().startswith("m=")
    ]
    return list(zip(starts, starts[1:] + [len(sdp)]))


class MediaSection:
    """
    A media section of a session description, that is an `m=` line and all
    the lines which follow it up to the next `m=` line.

    The lines following the `m=` line are kept as they are, so a section
    which is not modified serializes to exactly the text it was parsed from.
    """

    def __init__(self, line: str, lines: Optional[list[str]] = None) -> None:
        m = MEDIA_LINE_RE.match(line)
        if m:
            self.kind = m.group(1)
            self.port: Optional[str] = m.group(2)
            self.profile: Optional[str] = m.group(3)
            self.fmt = m.group(4).split()
        else:
            bits = line[2:].split()
            self.kind = bits[0] if bits else ""
            self.port = None
            self.profile = None
            self.fmt = []

        self.lines = lines if lines is not None else []

        self._line = line
        self._parsed = self.__fields()

    def __fields(self) -> tuple:
        return (self.kind, self.port, self.profile, list(self.fmt))

    def __str__(self) -> str:
        return "\n".join(self.splitlines())

    @property
    def codecs(self) -> list[int]:
        """
        The payload types listed on the `m=` line, in order.

        This is empty unless every format is a number.
        """
        if self.fmt and all(is_number(x) for x in self.fmt):
            return [int(x) for x in self.fmt]
        return []

    @property
    def header_extensions(self) -> list[RTCRtpHeaderExtensionParameters]:
        return extensions_from_lines(self.lines)

    @property
    def line(self) -> str:
        if self.__fields() == self._parsed:
            return self._line
        fields = [f"m={self.kind}", str(self.port), str(self.profile)] + self.fmt
        return " ".join(fields)

    @property
    def rtp_codecs(self) -> list[RTCRtpCodecParameters]:
        """
        The codecs described by `a=rtpmap` lines, completed with their
        `a=fmtp` parameters and `a=rtcp-fb` feedback.
        """
        codecs = []
        for attr, value in self.attributes():
            if attr == "rtpmap" and value is not None:
                bits = value.split(maxsplit=1)
                if len(bits) < 2 or not is_number(bits[0]):
                    continue
                desc = bits[1].split("/")
                if len(desc) < 2 or not is_number(desc[1]):
                    continue
                if self.kind == "audio":
                    if len(desc) > 2 and is_number(desc[2]):
                        channels: Optional[int] = int(desc[2])
                    else:
                        channels = 1
                else:
                    channels = None
                codecs.append(
                    RTCRtpCodecParameters(
                        mimeType=f"{self.kind}/{desc[0]}",
                        clockRate=int(desc[1]),
                        channels=channels,
                        payloadType=int(bits[0]),
                    )
                )

        # requires codecs to have been parsed
        for attr, value in self.attributes():
            if attr == "fmtp" and value is not None:
                pt = payload_type_from_sdp(value)
                bits = value.split(maxsplit=1)
                for codec in codecs:
                    if codec.payloadType == pt and len(bits) > 1:
                        codec.parameters = parameters_from_sdp(bits[1])
            elif attr == "rtcp-fb" and value is not None:
                bits = value.split(" ", 2)
                if len(bits) < 2:
                    continue
                for codec in codecs:
                    if bits[0] in ["*", str(codec.payloadType)]:
                        codec.rtcpFeedback.append(
                            RTCRtcpFeedback(
                                type=bits[1],
                                parameter=bits[2] if len(bits) > 2 else None,
                            )
                        )
        return codecs

    def attributes(self) -> Iterator[tuple[str, Optional[str]]]:
        for line in self.lines:
            if line.startswith("a="):
                yield parse_attr(line)

    def remove_attributes(
        self, predicate: Callable[[str, Optional[str]], bool]
    ) -> list[str]:
        """
        Remove every `a=` line for which `predicate(attr, value)` is true.

        Returns the removed lines.
        """
        kept = []
        removed = []
        for line in self.lines:
            if line.startswith("a=") and predicate(*parse_attr(line)):
                removed.append(line)
            else:
                kept.append(line)
        self.lines = kept
        return removed

    def remove_extensions(
        self, keys: Iterable[ExtensionKeyValue], key: ExtensionKey = ExtensionKey.URI
    ) -> list[RTCRtpHeaderExtensionParameters]:
        """
        Remove the `a=extmap` lines whose key is not in `keys`.

        Returns the removed header extensions.
        """
        wanted = set(keys)

        def unwanted(attr: str, value: Optional[str]) -> bool:
            if attr != "extmap":
                return False
            extension = extmap_from_sdp(value)
            return extension is not None and extension_key(extension, key) not in wanted

        return extensions_from_lines(self.remove_attributes(unwanted))

    def splitlines(self) -> list[str]:
        return [self.line] + self.lines

    def strip_codecs(self, codecs: Iterable[int]) -> list[int]:
        """
        Replace the formats on the `m=` line by `codecs` and remove the
        attributes of the codecs which were offered but are no longer listed.

        Returns the removed payload types. A malformed `m=` line, or one whose
        formats are not all payload types, is left as is.
        """
        if self.port is None or (self.fmt and not self.codecs):
            return []

        allowed = list(dict.fromkeys(codecs))
        unwanted = [pt for pt in self.codecs if pt not in allowed]
        self.fmt = [str(pt) for pt in allowed]
        self.remove_attributes(
            lambda attr, value: attr in CODEC_ATTRIBUTES
            and payload_type_from_sdp(value) in unwanted
        )
        return unwanted


class SessionDescription:
    """
    A session description split into its session-level lines and its media
    sections.
    """

    def __init__(self) -> None:
        self.session: list[str] = []
        self.media: list[MediaSection] = []
        self.separator = "\n"
        self.terminated = False

    @classmethod
    def parse(cls, sdp: str) -> "SessionDescription":
        description = cls()
        if "\r\n" in sdp:
            description.separator = "\r\n"
        text, description.terminated = normalize_lines(sdp)

        session_lines, media_groups = grouplines(text)
        description.session = session_lines
        for media_lines in media_groups:
            description.media.append(MediaSection(media_lines[0], media_lines[1:]))
        return description

    def codecs(self, kind: str) -> list[int]:
        """
        The payload types of all media sections of the given kind, in order
        of first appearance.
        """
        codecs: list[int] = []
        for media in self.media_of_kind(kind):
            for pt in media.codecs:
                if pt not in codecs:
                    codecs.append(pt)
        return codecs

    def header_extensions(self, kind: str) -> list[RTCRtpHeaderExtensionParameters]:
        """
        The header extensions of the first media section of the given kind.
        """
        for media in self.media_of_kind(kind):
            return media.header_extensions
        return []

    def media_of_kind(self, kind: str) -> list[MediaSection]:
        return [media for media in self.media if media.kind == kind]

    def splitlines(self) -> list[str]:
        lines = list(self.session)
        for media in self.media:
            lines += media.splitlines()
        return lines

    def __str__(self) -> str:
        sdp = self.separator.join(self.splitlines())
        if self.terminated:
            sdp += self.separator
        return sdp


def split_tracks(sdp: str) -> list[str]:
    """
    Split `sdp` into the text of its media sections, with LF line endings.

    The session-level lines which precede the first `m=` line are not returned.
    """
    return [str(media) for media in SessionDescription.parse(sdp).media]


def codecs_of_track(track: str) -> set[int]:
    """
    Return the payload types listed on the `m=` line of `track`.
    """
    lines = track.splitlines()
    if not lines or not lines[0].startswith("m="):
        return set()
    return set(MediaSection(lines[0]).codecs)


def codecs_for_modality(sdp: str, kind: str) -> set[int]:
    """
    Return the payload types of all the media sections of the given kind.
    """
    return set(SessionDescription.parse(sdp).codecs(kind))


def extensions_of_track(
    track: str, key: ExtensionKey = ExtensionKey.URI
) -> set[ExtensionKeyValue]:
    """
    Return the header extensions declared by the `a=extmap` lines of `track`,
    keyed by URI or by id.
    """
    text, _ = normalize_lines(track)
    return {extension_key(x, key) for x in extensions_from_lines(text.split("\n"))}


def extensions_for_modality(
    sdp: str, kind: str, key: ExtensionKey = ExtensionKey.URI
) -> set[ExtensionKeyValue]:
    """
    Return the header extensions of the first media section of the given kind.
    """
    extensions = SessionDescription.parse(sdp).header_extensions(kind)
    return {extension_key(x, key) for x in extensions}


def remove_lines(text: str, pattern: LinePattern) -> str:
    """
    Remove every line of `text` which contains `pattern`.

    `pattern` is either a literal string or a compiled regular expression.
    Whole lines are removed, the remaining ones are left untouched.

    This is a text-level filter: the rewriters in :mod:`rtcsdp.rewrite` do not
    use it, they remove parsed attributes with
    :meth:`MediaSection.remove_attributes` instead.
    """
    if isinstance(pattern, str):
        literal = pattern

        def matches(line: str) -> bool:
            return literal in line

    else:
        regex = pattern

        def matches(line: str) -> bool:
            return regex.search(line) is not None

    lines = re.findall(r"[^\n]*\n|[^\n]+$", text)
    kept = [i for i, line in enumerate(lines) if not matches(line.rstrip("\r\n"))]
    result = "".join(lines[i] for i in kept)

    # the last line had no line ending, so the new last line must not have one
    if kept and kept[-1] != len(lines) - 1 and not text.endswith("\n"):
        last = lines[kept[-1]]
        result = result[: len(result) - (len(last) - len(last.rstrip("\r\n")))]
    return result
