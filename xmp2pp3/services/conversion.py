import enum
import os
from dataclasses import dataclass
from typing import Callable, List, Optional

from xmp2pp3.core.errors import CropGeometryError, MetadataLoadError, MetadataTypeError
from xmp2pp3.core.types import IMetadataSource, ISettingsSink
from xmp2pp3.features.development.logic import import_development
from xmp2pp3.features.geometry.logic import import_crop
from xmp2pp3.features.tags.logic import import_tags
from xmp2pp3.infrastructure.metadata.exiv2_loader import is_sidecar, load_metadata
from xmp2pp3.infrastructure.metadata.snapshot import MetadataSnapshot
from xmp2pp3.infrastructure.settings.pp3 import Settings, pp3_path
from xmp2pp3.kernel.system.config import APP_CONFIG, SUPPORTED_IMAGE_EXTENSIONS
from xmp2pp3.kernel.system.logging import get_logger

logger = get_logger(__name__)


class FileStatus(enum.Enum):
    WRITTEN = "written"
    UNCHANGED = "unchanged"  # nothing to convert
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FileResult:
    path: str
    status: FileStatus
    message: str = ""
    profile: Optional[str] = None


def convert_metadata(metadata: IMetadataSource, settings: ISettingsSink) -> None:
    """
    Applies every conversion to one image. A malformed crop only costs the
    crop; everything else is still converted.
    """
    import_tags(metadata, settings)
    import_development(metadata, settings)
    try:
        import_crop(metadata, settings)
    except CropGeometryError as e:
        source = getattr(metadata, "source", None) or "image"
        logger.error(f"Skipping crop of {source}: {e}")


def process_file(
    path: str,
    force: bool = False,
    dry_run: bool = False,
    dump_metadata: bool = False,
    loader: Callable[[str], MetadataSnapshot] = load_metadata,
) -> FileResult:
    """
    Converts the edits of one image into its profile.
    """
    if is_sidecar(path) or path.endswith(APP_CONFIG.profile_suffix):
        return FileResult(path, FileStatus.SKIPPED, "sidecar or profile")

    try:
        metadata = loader(path)
    except MetadataLoadError as e:
        logger.warning(str(e))
        return FileResult(path, FileStatus.SKIPPED, "unreadable")

    if dump_metadata:
        logger.debug(f"{path}\n{metadata.describe()}")

    if not metadata.is_lightroom() and not force:
        logger.warning(f"{path} does not appear to be a lightroom file; skipping")
        return FileResult(path, FileStatus.SKIPPED, "not a lightroom file")

    settings = Settings()
    settings.load(path)
    try:
        convert_metadata(metadata, settings)
    except MetadataTypeError as e:
        logger.error(f"Cannot convert {path}: {e}")
        return FileResult(path, FileStatus.FAILED, str(e))

    if settings.is_empty():
        return FileResult(path, FileStatus.UNCHANGED, "nothing to convert")

    profile = settings.dumps()
    if dry_run:
        logger.info(f"Would write {pp3_path(path)}:\n{profile}")
        return FileResult(path, FileStatus.UNCHANGED, "dry run", profile)

    try:
        written = settings.commit(path)
    except OSError as e:
        logger.error(f"Cannot write profile for {path}: {e}")
        return FileResult(path, FileStatus.FAILED, str(e))
    return FileResult(path, FileStatus.WRITTEN, written, profile)


def discover_files(directory: str) -> List[str]:
    """Recursively lists supported images under a directory, sorted."""
    files = []
    for root, dirs, filenames in os.walk(directory):
        dirs.sort()
        for fname in sorted(filenames):
            if os.path.splitext(fname)[1].lower() in SUPPORTED_IMAGE_EXTENSIONS:
                files.append(os.path.join(root, fname))
    return files


def process_directory(path: str, **kwargs) -> List[FileResult]:
    return [process_file(file_path, **kwargs) for file_path in discover_files(path)]
