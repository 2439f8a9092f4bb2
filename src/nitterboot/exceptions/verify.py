from __future__ import annotations

from collections.abc import Sequence

from nitterboot.exceptions.base import NitterbootError


class MissingArtifactsError(NitterbootError):
    """Required output files are absent after the workflow completed.

    Attributes:
        missing: Filenames that were not found.
    """

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(
            f"Missing required files: {' '.join(self.missing)}",
            self.missing,
        )
