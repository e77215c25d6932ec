"""
Multipart Decoder - Parses multipart/form-data submissions.

Handles:
- Base64-encoded bodies as delivered by serverless gateways
- Boundary extraction from the Content-Type header
- Text fields (UTF-8, trimmed, last write wins)
- The logo file part, gated by an extension allow-list and a size limit

The parser is a pure function of (body, content type) apart from staging
an accepted logo to a temp file. It does not support nested multipart,
header folding or non-UTF-8 text parts.
"""

import base64
import binascii
import logging
import os
import re
import tempfile
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from makerbench.api.middleware.error_handler import MalformedRequestError


logger = logging.getLogger(__name__)

# Accepted logo extensions and the media type each one implies
ALLOWED_LOGO_TYPES: Dict[str, str] = {
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".avif": "image/avif",
}

_BOUNDARY_RE = re.compile(r'boundary=(?:"([^"]+)"|([^;\s]+))', re.IGNORECASE)
_NAME_RE = re.compile(r'\bname="([^"]*)"', re.IGNORECASE)
_FILENAME_RE = re.compile(r'\bfilename="([^"]*)"', re.IGNORECASE)


@dataclass
class MultipartConfig:
    """Configuration for multipart decoding."""
    file_field: str = "logo"
    max_file_size_bytes: int = 1024 * 1024
    scratch_dir: Optional[str] = None


@dataclass
class StagedFile:
    """A file part written to scratch storage until it is relayed upstream."""
    filename: str
    path: str
    media_type: str
    extension: str
    size: int

    def read_bytes(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()

    def discard(self) -> None:
        """Remove the temp file. Safe to call more than once."""
        try:
            os.remove(self.path)
            logger.debug(f"Removed staged file {self.path}")
        except FileNotFoundError:
            pass


@dataclass
class SubmissionFields:
    """Decoded, not yet validated, form submission."""
    values: Dict[str, str] = field(default_factory=dict)
    logo: Optional[StagedFile] = None

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(name, default)

    def discard_files(self) -> None:
        if self.logo is not None:
            self.logo.discard()


def extract_boundary(content_type: Optional[str]) -> str:
    """Pull the boundary token out of a multipart Content-Type header."""
    if not content_type or not content_type.strip().lower().startswith("multipart/"):
        raise MalformedRequestError("Content-Type must be multipart/form-data")

    match = _BOUNDARY_RE.search(content_type)
    if not match:
        raise MalformedRequestError("Multipart boundary not found in Content-Type")
    return match.group(1) or match.group(2)


def _decode_body(body: Union[bytes, str], is_base64_encoded: bool) -> bytes:
    if is_base64_encoded:
        try:
            return base64.b64decode(body)
        except (binascii.Error, ValueError):
            raise MalformedRequestError("Request body is not valid base64")
    if isinstance(body, str):
        return body.encode("utf-8")
    return body or b""


def _split_part(segment: bytes):
    """Split a part into (header block, content), or None if it has no blank line."""
    # Drop the line terminator that follows the delimiter
    if segment.startswith(b"\r\n"):
        segment = segment[2:]
    elif segment.startswith(b"\n"):
        segment = segment[1:]

    for separator in (b"\r\n\r\n", b"\n\n"):
        index = segment.find(separator)
        if index != -1:
            headers = segment[:index].decode("utf-8", errors="replace")
            return headers, segment[index + len(separator):]
    return None


def _strip_line_terminator(content: bytes) -> bytes:
    if content.endswith(b"\r\n"):
        return content[:-2]
    if content.endswith(b"\n"):
        return content[:-1]
    return content


def _stage_file(filename: str, extension: str, content: bytes, config: MultipartConfig) -> StagedFile:
    if len(content) > config.max_file_size_bytes:
        raise MalformedRequestError(
            f"Logo exceeds the maximum size of {config.max_file_size_bytes} bytes"
        )

    fd, path = tempfile.mkstemp(prefix="logo-", suffix=extension, dir=config.scratch_dir)
    with os.fdopen(fd, "wb") as f:
        f.write(content)
    logger.debug(f"Staged {filename} ({len(content)} bytes) at {path}")

    return StagedFile(
        filename=filename,
        path=path,
        media_type=ALLOWED_LOGO_TYPES[extension],
        extension=extension,
        size=len(content),
    )


def decode_multipart(
    body: Union[bytes, str],
    is_base64_encoded: bool,
    content_type: Optional[str],
    config: Optional[MultipartConfig] = None,
) -> SubmissionFields:
    """
    Decode a multipart/form-data body into form fields and a staged logo.

    Args:
        body: Raw request body.
        is_base64_encoded: Whether the transport base64-encoded the body.
        content_type: The request's Content-Type header.
        config: File field name, size limit and scratch directory.

    Returns:
        SubmissionFields with text values and the optional staged logo.

    Raises:
        MalformedRequestError: If the content type, boundary or body is unusable.
    """
    config = config or MultipartConfig()
    boundary = extract_boundary(content_type)
    raw = _decode_body(body, is_base64_encoded)
    if not raw:
        raise MalformedRequestError("Request body is empty")

    fields = SubmissionFields()
    try:
        for segment in raw.split(b"--" + boundary.encode("utf-8")):
            if not segment.strip() or segment.startswith(b"--"):
                continue

            part = _split_part(segment)
            if part is None:
                continue
            headers, content = part

            name_match = _NAME_RE.search(headers)
            if not name_match:
                continue
            name = name_match.group(1)
            filename_match = _FILENAME_RE.search(headers)

            if filename_match is None:
                fields.values[name] = content.decode("utf-8", errors="replace").strip()
                continue

            # File parts outside the designated field are ignored
            filename = filename_match.group(1)
            if name != config.file_field or not filename:
                continue

            extension = os.path.splitext(filename)[1].lower()
            if extension not in ALLOWED_LOGO_TYPES:
                logger.info(f"Dropping logo with unsupported extension: {filename}")
                continue

            staged = _stage_file(filename, extension, _strip_line_terminator(content), config)
            if fields.logo is not None:
                fields.logo.discard()
            fields.logo = staged
    except Exception:
        fields.discard_files()
        raise

    return fields
