"""Interview media helpers — MIME detection, inline parts, File API upload and polling."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from google.genai import types

from ..client import GeminiClient
from ..config import get_config
from ..errors import MediaUploadError, UploadProcessingFailed

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "video/mp4"

SUPPORTED_MEDIA_EXTENSIONS: dict[str, str] = {
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska",
    ".mpeg": "video/mpeg",
    ".wmv": "video/x-ms-wmv",
    ".3gpp": "video/3gpp",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".wav": "audio/wav",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
}


def _media_mime_type(path: Path) -> str:
    """Return MIME type for an interview recording, or raise ValueError if unsupported."""
    ext = path.suffix.lower()
    mime = SUPPORTED_MEDIA_EXTENSIONS.get(ext)
    if not mime:
        allowed = ", ".join(sorted(SUPPORTED_MEDIA_EXTENSIONS))
        raise ValueError(f"Unsupported media extension '{ext}'. Supported: {allowed}")
    return mime


@dataclass(frozen=True)
class MediaInput:
    """A recorded interview as received from the caller."""

    path: Path
    display_name: str
    mime_type: str
    size: int

    @classmethod
    def from_path(cls, file_path: str | Path, *, mime_type: str | None = None) -> MediaInput:
        """Validate a local file and describe it.

        Raises:
            FileNotFoundError: If the path does not exist.
            ValueError: If the path is not a file or the extension is unsupported
                and no ``mime_type`` was given.
        """
        p = Path(file_path).expanduser().resolve()
        if not p.exists():
            raise FileNotFoundError(f"Media file not found: {file_path}")
        if not p.is_file():
            raise ValueError(f"Not a file: {file_path}")
        return cls(
            path=p,
            display_name=p.name,
            mime_type=mime_type or _media_mime_type(p),
            size=p.stat().st_size,
        )

    @property
    def resolved_mime_type(self) -> str:
        return self.mime_type or DEFAULT_MIME_TYPE

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class InlineMedia:
    """Recording bytes embedded directly in the request."""

    data: bytes
    mime_type: str

    def to_part(self) -> types.Part:
        return types.Part.from_bytes(data=self.data, mime_type=self.mime_type)


@dataclass(frozen=True)
class FileReference:
    """A File API object that has reached the ACTIVE state."""

    uri: str
    mime_type: str

    def to_part(self) -> types.Part:
        return types.Part(file_data=types.FileData(file_uri=self.uri, mime_type=self.mime_type))


ContentPart = InlineMedia | FileReference


def _state_name(state: object) -> str:
    """Render a File API state (enum or plain string) as its bare name."""
    name = getattr(state, "name", None) or getattr(state, "value", None) or state
    return str(name) if name is not None else "STATE_UNSPECIFIED"


async def _wait_for_active(
    client,
    file_name: str,
    *,
    interval: float,
    max_polls: int = 0,
) -> types.File:
    """Poll the Files API while the file is PROCESSING.

    Args:
        client: google.genai client instance.
        file_name: The file resource name (e.g. "files/abc123").
        interval: Seconds between polling attempts.
        max_polls: Max number of re-checks after the first; 0 means unbounded.

    Returns:
        The file once it is ACTIVE.

    Raises:
        UploadProcessingFailed: If the file settles in any state other than ACTIVE.
        TimeoutError: If the file is still PROCESSING after ``max_polls`` re-checks.
    """
    file_info = await client.aio.files.get(name=file_name)
    polls = 0
    while _state_name(file_info.state) == "PROCESSING":
        if max_polls and polls >= max_polls:
            raise TimeoutError(
                f"File {file_name} not active after {polls} polls (state: PROCESSING)"
            )
        await asyncio.sleep(interval)
        polls += 1
        file_info = await client.aio.files.get(name=file_name)

    state = _state_name(file_info.state)
    if state != "ACTIVE":
        raise UploadProcessingFailed(file_name, state)
    if polls:
        logger.info("File %s active after %d poll(s)", file_name, polls)
    return file_info


async def _upload_media(media: MediaInput) -> FileReference:
    """Upload via the Gemini File API and wait until the file is ACTIVE."""
    cfg = get_config()
    client = GeminiClient.get()
    mime_type = media.resolved_mime_type

    try:
        uploaded = await client.aio.files.upload(
            file=media.path,
            config=types.UploadFileConfig(display_name=media.display_name, mime_type=mime_type),
        )
        logger.info("Uploaded %s → %s (state=%s)", media.display_name, uploaded.uri, uploaded.state)
        processed = await _wait_for_active(
            client,
            uploaded.name,
            interval=cfg.upload_poll_interval,
            max_polls=cfg.upload_max_polls,
        )
    except (UploadProcessingFailed, TimeoutError):
        raise
    except Exception as exc:
        logger.error("Upload failed for %s: %s", media.display_name, exc)
        raise MediaUploadError(
            f"Large file upload failed: {exc}. Try checking connection or file format."
        ) from exc

    return FileReference(uri=processed.uri, mime_type=processed.mime_type or mime_type)


async def prepare_content(media: MediaInput) -> ContentPart:
    """Turn a recording into exactly one content part.

    Files larger than ``inline_max_bytes`` are uploaded through the File API;
    files at or below the threshold are embedded inline.
    """
    if media.size > get_config().inline_max_bytes:
        return await _upload_media(media)
    data = await asyncio.to_thread(media.read_bytes)
    return InlineMedia(data=data, mime_type=media.resolved_mime_type)
