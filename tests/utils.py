import logging
import os


def lf2crlf(x: str) -> str:
    return x.replace("\n", "\r\n")


def load(name: str) -> str:
    path = os.path.join(os.path.dirname(__file__), name)
    with open(path, encoding="utf-8", newline="") as fp:
        return fp.read()


if os.environ.get("RTCSDP_DEBUG"):
    logging.basicConfig(level=logging.DEBUG)
