import enum
from dataclasses import dataclass, field

LINE_SEPARATORS = ["\n", "\r\n"]


class ExtensionKey(enum.Enum):
    """
    The :class:`ExtensionKey` selects how RTP header extensions of two
    session descriptions are matched against each other.
    """

    ID = "id"
    """
    Match on the numeric id of the `a=extmap` line. Ids are local to a session
    and may be renumbered by the remote party.
    """

    URI = "uri"
    """
    Match on the URI of the `a=extmap` line, whichever id it was given.
    """


@dataclass
class RTCSdpConfiguration:
    """
    The :class:`RTCSdpConfiguration` dictionary is used to provide options to
    :func:`rtcsdp.restrict_to_reference`.
    """

    extensionKey: ExtensionKey = ExtensionKey.URI
    "How header extensions are matched against the reference description."

    restrictedKinds: list[str] = field(default_factory=lambda: ["audio", "video"])
    "The media kinds whose codecs and header extensions are restricted."

    lineSeparator: str = "\n"
    "The line separator of the rewritten description, `'\\n'` or `'\\r\\n'`."

    def __post_init__(self) -> None:
        if self.lineSeparator not in LINE_SEPARATORS:
            raise ValueError(
                "'lineSeparator' must be in ['\\n', '\\r\\n'] "
                f"(got {self.lineSeparator!r})"
            )
