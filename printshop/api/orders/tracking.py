"""Shopper-facing tracking codes"""

import random
import time
from typing import Callable, Optional

from printshop.core.config import settings

class TrackingCodeGenerator:
    """
    Builds codes like ``3DK-48213-907``: a time-derived part (epoch millis
    mod 100000) and a random part (0-999). Short enough to read over the
    phone, not unique by construction; callers check candidates against
    stored orders.
    """

    def __init__(
        self,
        prefix: Optional[str] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None
    ):
        self.prefix = prefix or settings.TRACKING_CODE_PREFIX
        self._clock = clock
        self._rng = rng or random.SystemRandom()

    def generate(self) -> str:
        timestamp = int(self._clock() * 1000) % 100000
        suffix = self._rng.randrange(1000)
        return f"{self.prefix}-{timestamp}-{suffix}"
