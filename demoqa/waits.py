"""Bounded waits over the live DOM.

Every DOM-dependent read goes through ``poll_until``; a wait that runs out of
time fails exactly like an assertion, with the message naming the last value
that was seen.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar, Union

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
)
from selenium.webdriver.support.ui import WebDriverWait

logger = logging.getLogger(__name__)

T = TypeVar("T")

POLL_FREQUENCY = 0.1
IGNORED_EXCEPTIONS = (NoSuchElementException, StaleElementReferenceException)


def poll_until(
    driver,
    predicate: Callable[..., T],
    timeout: float,
    message: Union[str, Callable[[], str]] = "",
    poll_frequency: Optional[float] = None,
) -> T:
    """Call ``predicate(driver)`` until it returns a truthy value.

    Raises AssertionError when ``timeout`` seconds pass first. ``message`` may
    be a callable so it can report state captured by the predicate.
    """
    wait = WebDriverWait(
        driver,
        timeout,
        poll_frequency=poll_frequency or POLL_FREQUENCY,
        ignored_exceptions=IGNORED_EXCEPTIONS,
    )
    try:
        return wait.until(predicate)
    except TimeoutException as exc:
        text = message() if callable(message) else message
        raise AssertionError(text or f"Condition not met within {timeout}s") from exc


def settle(seconds: float) -> None:
    """Fixed delay for re-renders that expose no observable completion signal."""
    if seconds > 0:
        time.sleep(seconds)
