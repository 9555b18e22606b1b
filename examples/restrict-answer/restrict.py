import argparse
import json
import logging

from rtcsdp import (
    ExtensionKey,
    RTCSdpConfiguration,
    RTCSessionDescription,
    inject_attribute,
    restrict_description,
)


def description_from_file(path, type):
    with open(path) as fp:
        data = fp.read()

    # either a bare SDP body or {"type": ..., "sdp": ...} as sent by signaling
    if data.lstrip().startswith("{"):
        message = json.loads(data)
        return RTCSessionDescription(sdp=message["sdp"], type=message["type"])
    return RTCSessionDescription(sdp=data, type=type)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Restrict an answer to the codecs and header extensions of an offer"
    )
    parser.add_argument("offer", help="File containing the offer")
    parser.add_argument("answer", help="File containing the answer")
    parser.add_argument(
        "--extension-key",
        choices=[x.value for x in ExtensionKey],
        default=ExtensionKey.URI.value,
        help="How header extensions are matched (default: uri)",
    )
    parser.add_argument("--crlf", action="store_true", help="Output CRLF line endings")
    parser.add_argument(
        "--inject",
        nargs=3,
        action="append",
        default=[],
        metavar=("KIND", "INDEX", "ATTRIBUTE"),
        help="Append ATTRIBUTE to the INDEX-th media section of the given KIND",
    )
    parser.add_argument("--json", action="store_true", help="Output a JSON description")
    parser.add_argument("--verbose", "-v", action="count")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    configuration = RTCSdpConfiguration(
        extensionKey=ExtensionKey(args.extension_key),
        lineSeparator="\r\n" if args.crlf else "\n",
    )
    offer = description_from_file(args.offer, "offer")
    answer = restrict_description(
        description_from_file(args.answer, "answer"), offer, configuration
    )

    sdp = answer.sdp
    for kind, index, attribute in args.inject:
        sdp = inject_attribute(sdp, kind, int(index), attribute)

    if args.json:
        print(json.dumps({"sdp": sdp, "type": answer.type}, sort_keys=True))
    else:
        print(sdp, end="")
