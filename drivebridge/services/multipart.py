"""multipart/related framing for Drive's uploadType=multipart endpoint.

The body carries exactly two parts: JSON metadata, then the file content
verbatim under its own mime type.
"""

import json

BOUNDARY = "-------314159265358979323846"


def content_type(boundary: str = BOUNDARY) -> str:
    return f"multipart/related; boundary={boundary}"


def build_body(metadata: dict, content: str, mime_type: str, boundary: str = BOUNDARY) -> str:
    """Frame metadata and text content as a two-part multipart/related body."""
    delimiter = f"\r\n--{boundary}\r\n"
    close_delimiter = f"\r\n--{boundary}--"
    return (
        delimiter
        + "Content-Type: application/json; charset=UTF-8\r\n\r\n"
        + json.dumps(metadata, separators=(",", ":"), ensure_ascii=False)
        + delimiter
        + f"Content-Type: {mime_type}\r\n\r\n"
        + content
        + close_delimiter
    )
