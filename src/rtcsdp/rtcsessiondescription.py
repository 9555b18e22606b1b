from dataclasses import dataclass

from .sdp import SessionDescription

DESCRIPTION_TYPES = ["offer", "pranswer", "answer", "rollback"]


@dataclass
class RTCSessionDescription:
    """
    The :class:`RTCSessionDescription` dictionary describes one end of a
    connection, as exchanged by the signaling layer.
    """

    sdp: str
    "The SDP text of the description."
    type: str
    "One of `'offer'`, `'pranswer'`, `'answer'` or `'rollback'`."

    def __post_init__(self) -> None:
        if self.type not in DESCRIPTION_TYPES:
            raise ValueError(
                "'type' must be in ['offer', 'pranswer', 'answer', 'rollback'] "
                f"(got '{self.type}')"
            )

    def parse(self) -> SessionDescription:
        """
        Split the SDP text into its session-level lines and media sections.
        """
        return SessionDescription.parse(self.sdp)
