from __future__ import annotations

import abc
import logging

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config import Credentials


class BaseDriver(abc.ABC):
    """
    Browser-level capability used by the submission loop.

    Each operation returns normally on success and raises UIDriverError on any
    failure; there is no finer-grained status.
    """

    def __init__(self, *, logger: logging.Logger):
        self.logger = logger

    @abc.abstractmethod
    def restore_session(self, credentials: "Credentials") -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def submit_source(self, url: str) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def trigger_generation(self) -> None:
        raise NotImplementedError
