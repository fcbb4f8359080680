"""Filesystem-backed storage for uploads and exports."""

from dataclasses import dataclass
from pathlib import Path

from app.settings import settings
from studysmart_core.errors import NotFoundError, ValidationError
from studysmart_core.exporters.filenames import export_timestamp
from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """An uploaded file on disk."""

    filename: str
    original_name: str
    path: str
    size: int
    content_type: str


async def init_storage() -> None:
    """Create the upload and export directories."""
    for directory in (settings.upload_dir, settings.export_dir):
        Path(directory).mkdir(parents=True, exist_ok=True)


def _resolve_inside(root: Path, relative: str) -> Path:
    """Resolve a client-supplied path, refusing anything outside root.

    Accepts either a bare filename or a path prefixed with the root's name
    (as returned by upload_file).
    """
    root = Path(root).resolve()
    candidate = Path(relative)
    if candidate.parts and candidate.parts[0] == root.name:
        candidate = Path(*candidate.parts[1:]) if len(candidate.parts) > 1 else Path()
    resolved = (root / candidate).resolve()
    if resolved == root or root not in resolved.parents:
        raise ValidationError(f"Invalid file path: {relative}")
    return resolved


async def upload_file(
    original_name: str,
    data: bytes,
    content_type: str = "application/pdf",
) -> StoredFile:
    """Store an uploaded file under a timestamped name."""
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)

    safe_name = Path(original_name).name or "upload.pdf"
    filename = f"{export_timestamp()}-{safe_name}"
    (root / filename).write_bytes(data)
    logger.info(f"Stored upload {filename} ({len(data)} bytes)")

    return StoredFile(
        filename=filename,
        original_name=safe_name,
        path=f"{root.name}/{filename}",
        size=len(data),
        content_type=content_type,
    )


async def read_upload(file_path: str) -> bytes:
    """Read an uploaded file by the reference returned from upload_file.

    Raises:
        ValidationError: If the path points outside the upload directory
        NotFoundError: If the file does not exist
    """
    path = _resolve_inside(Path(settings.upload_dir), file_path)
    if not path.is_file():
        raise NotFoundError("File not found")
    return path.read_bytes()


def reserve_export_path(filename: str) -> Path:
    """Create an empty export file, never reusing an existing name.

    A numeric suffix is added to the stem when the name is taken.
    """
    root = Path(settings.export_dir)
    root.mkdir(parents=True, exist_ok=True)

    candidate = root / filename
    counter = 1
    while True:
        try:
            candidate.touch(exist_ok=False)
            return candidate
        except FileExistsError:
            candidate = root / f"{Path(filename).stem}-{counter}{Path(filename).suffix}"
            counter += 1


async def write_export(filename: str, content: str) -> Path:
    """Persist export text to a new file and return its path."""
    path = reserve_export_path(filename)
    path.write_text(content, encoding="utf-8")
    logger.info(f"Wrote export {path.name} ({len(content)} chars)")
    return path


async def get_export(filename: str) -> Path:
    """Locate a persisted export by filename.

    Raises:
        ValidationError: If the name points outside the export directory
        NotFoundError: If the export does not exist
    """
    path = _resolve_inside(Path(settings.export_dir), filename)
    if not path.is_file():
        raise NotFoundError("Export not found")
    return path
