from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
import hashlib


@dataclass(frozen=True)
class Version:
    """
    Semantic version of the recorder package.

    Carries a content hash of the installed sources so two installs with
    the same version number can still be told apart.
    """
    major: int
    minor: int
    patch: int
    hash: str
    date: datetime

    def __str__(self) -> str:
        """Return the semantic version string (e.g., '1.0.0')."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def full_version(self) -> str:
        """Return version, short hash and build date."""
        return f"{self} (hash: {self.hash_short()}, date: {self.date_string()})"

    def semver(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def hash_short(self, length: int = 8) -> str:
        return self.hash[:length]

    def date_string(self, fmt: str = "%Y-%m-%d") -> str:
        return self.date.strftime(fmt)


def _compute_package_hash() -> str:
    """SHA256 over the recorder package's .py sources, in path order."""
    package_dir = Path(__file__).resolve().parent.parent
    hasher = hashlib.sha256()
    for source in sorted(package_dir.rglob("*.py")):
        try:
            hasher.update(source.read_bytes())
        except OSError:
            continue
    return hasher.hexdigest()


RECORDER_VERSION = Version(
    major=1,
    minor=0,
    patch=0,
    hash=_compute_package_hash(),
    date=datetime(2026, 10, 17),
)
