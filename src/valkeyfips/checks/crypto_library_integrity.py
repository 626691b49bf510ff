from pathlib import Path

from .. import util
from ..exceptions import (
    ERROR_SYSTEM_LIBRARY_MISSING,
    ERROR_REFERENCE_LIBRARY_MISSING,
    ERROR_DIGEST_MISMATCH,
    ERROR_UNEXPECTED_LIBRARY,
    ERROR_UNEXPECTED_LIBRARY_NO_TARGET,
)
from ..models import FailureReason, LibraryPair, HardlinkPair
from . import BaseCheckTask


class CheckTask(BaseCheckTask):
    def run(self):
        paths = self._configuration.paths
        if not paths.fips_libraries and not paths.hardlinked_libraries:
            self.info("No reference libraries configured for this build variant")
        for pair in paths.fips_libraries:
            self._verify_digest(pair)
        for pair in paths.hardlinked_libraries:
            self._verify_hardlink(pair)
        for lib_path in paths.other_crypto_libraries:
            if Path(lib_path).is_file():
                self.warn(f"Non-FIPS crypto library detected: {lib_path}")

        if not self.failures:
            self.passed("No system OpenSSL libraries found (FIPS-only configuration)")
            self.passed("All crypto operations will use FIPS OpenSSL + wolfProvider")

    def _verify_digest(self, pair: LibraryPair):
        if not Path(pair.system).is_file():
            self.error(
                ERROR_SYSTEM_LIBRARY_MISSING.format(path=pair.system),
                FailureReason.MISSING_ARTIFACT,
            )
            return
        if not Path(pair.reference).is_file():
            self.error(
                ERROR_REFERENCE_LIBRARY_MISSING.format(path=pair.reference),
                FailureReason.MISSING_ARTIFACT,
            )
            return
        system_hash = util.sha256_file(pair.system)
        reference_hash = util.sha256_file(pair.reference)
        if system_hash != reference_hash:
            self.error(
                ERROR_DIGEST_MISMATCH.format(
                    system=pair.system,
                    system_hash=system_hash,
                    reference_hash=reference_hash,
                ),
                FailureReason.INTEGRITY,
            )
            return
        self.passed(f"FIPS OpenSSL library verified: {pair.system}")
        self.info(f"SHA256: {system_hash}")

    def _verify_hardlink(self, pair: HardlinkPair):
        if not Path(pair.path).is_file():
            return
        if not Path(pair.target).is_file():
            self.error(
                ERROR_UNEXPECTED_LIBRARY_NO_TARGET.format(path=pair.path),
                FailureReason.INTEGRITY,
            )
            return
        identity = util.file_identity(pair.path)
        if identity != util.file_identity(pair.target):
            self.error(
                ERROR_UNEXPECTED_LIBRARY.format(path=pair.path, target=pair.target),
                FailureReason.INTEGRITY,
            )
            return
        self.passed(
            f"FIPS OpenSSL library hardlinked: {pair.path} -> {pair.target} (inode {identity[1]})"
        )
