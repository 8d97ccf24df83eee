"""Upload grouper: partitions an uploaded image set by management number.

Filenames look like `<management number>_<anything>.<ext>`; browsers that
upload a whole directory prefix them with the relative path.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

FILE_TOO_LARGE = "File too large"
INVALID_FILENAME_PATTERN = "Invalid filename pattern"


@dataclass(frozen=True)
class IncomingFile:
    filename: str
    size: int
    content: Optional[bytes] = None


@dataclass(frozen=True)
class SkippedFile:
    filename: str
    reason: str


@dataclass
class GroupingResult:
    groups: Dict[str, List[str]] = field(default_factory=dict)
    skipped: List[SkippedFile] = field(default_factory=list)
    accepted: List[IncomingFile] = field(default_factory=list)


def stored_filename(original: str) -> str:
    """Last path segment of an uploaded filename."""
    return original.replace("\\", "/").split("/")[-1]


def extract_management_number(filename: str) -> Optional[str]:
    name = stored_filename(filename)
    if "_" not in name:
        return None
    prefix = name.split("_", 1)[0]
    return prefix or None


def group_files(files: List[IncomingFile], max_size: int) -> GroupingResult:
    """Group files by management number, keeping upload order.

    The size ceiling is checked before the filename, so an oversized file is
    always reported as too large.
    """
    result = GroupingResult()

    for incoming in files:
        name = stored_filename(incoming.filename)

        if incoming.size > max_size:
            result.skipped.append(SkippedFile(name, FILE_TOO_LARGE))
            continue

        management_number = extract_management_number(name)
        if management_number is None:
            result.skipped.append(SkippedFile(name, INVALID_FILENAME_PATTERN))
            continue

        images = result.groups.setdefault(management_number, [])
        if name not in images:
            images.append(name)
        result.accepted.append(incoming)

    return result
