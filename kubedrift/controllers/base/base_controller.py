"""Base controller for kubedrift data collection.

Controllers own one end-to-end data collection run and hand back
immutable results; they hold no state between runs.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class BaseController(ABC):
    """Base controller class for async collection runs.

    Subclasses should implement the abstract methods to provide
    specific data fetching functionality.
    """

    @abstractmethod
    async def fetch_all(self) -> Any:
        """Fetch all data from the source.

        Returns:
            The controller's assembled result
        """
        ...
