"""License scanner engine — discover installed packages and their declared licenses."""

from license_lens.engines.license_scanner.manifest import normalize_license
from license_lens.engines.license_scanner.models import UNKNOWN_LICENSE, PackageRecord
from license_lens.engines.license_scanner.scanner import scan

__all__ = ["PackageRecord", "UNKNOWN_LICENSE", "normalize_license", "scan"]
