"""Adaptive upload strategy selection.

Larger projects produce more blobs. Growing both the batch size and the
concurrency amortizes per-request overhead, and the longer timeout covers the
larger payload of each batch.
"""

from pydantic import BaseModel, ConfigDict, PositiveInt

from ace_uploader.constants import UPLOAD_STRATEGY_TIERS


class UploadStrategy(BaseModel):
    """Upload parameters for one project scale."""

    model_config = ConfigDict(frozen=True)

    batch_size: PositiveInt  # blobs per upload request
    concurrency: PositiveInt  # batches in flight at once
    timeout: PositiveInt  # per-request deadline in milliseconds
    scale_name: str  # for logging only

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000


def select_upload_strategy(blob_count: int) -> UploadStrategy:
    """Pick the upload strategy for a project with `blob_count` blobs.

    Every integer maps to a tier, zero and negative counts land in the
    smallest one.
    """
    *bounded, unbounded = UPLOAD_STRATEGY_TIERS
    tier = next((t for t in bounded if blob_count < t[0]), unbounded)
    _, batch_size, concurrency, timeout, scale_name = tier

    return UploadStrategy(
        batch_size=batch_size,
        concurrency=concurrency,
        timeout=timeout,
        scale_name=scale_name,
    )
