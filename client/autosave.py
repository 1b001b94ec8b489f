"""Debounced autosave for the document editor.

Every edit restarts a countdown. When the user has been idle for ``delay``
seconds the latest draft is saved, unless it is identical to what was last
saved. Closing the editor drops any pending save.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

Draft = Tuple[str, str]
SaveCallback = Callable[[str, str], Awaitable[object]]


class DebouncedAutosave:
    """Collapse bursts of edits into a single save call.

    Args:
        save: Coroutine function called with ``(title, content)``.
        delay: Idle time in seconds before saving.
        initial: The draft as loaded, so unchanged drafts are not re-saved.

    Attributes:
        last_error (str, optional): Message of the last failed save, cleared
            by the next successful one.

    Example:
        >>> async with DebouncedAutosave(save, delay=1.0, initial=(title, body)) as saver:
        ...     saver.schedule("Notes", "first draft")
        ...     saver.schedule("Notes", "second draft")  # only this one is saved
    """

    def __init__(
        self,
        save: SaveCallback,
        delay: float = 1.0,
        initial: Optional[Draft] = None,
    ):
        self._save = save
        self._delay = delay
        self._last_saved: Optional[Draft] = initial
        self._pending: Optional[Draft] = None
        self._timer: Optional[asyncio.Task] = None
        self.last_error: Optional[str] = None
        self._in_flight = 0

    async def __aenter__(self) -> "DebouncedAutosave":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def saving(self) -> bool:
        """True while at least one save call has not returned."""
        return self._in_flight > 0

    def schedule(self, title: str, content: str) -> None:
        """Record a new draft and restart the countdown."""
        self._pending = (title, content)
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().create_task(self._countdown())

    async def flush(self) -> bool:
        """Save the pending draft now. Returns True if a save happened."""
        self._cancel_timer()
        return await self._save_pending()

    def cancel(self) -> None:
        """Drop the pending draft without saving it."""
        self._cancel_timer()
        self._pending = None

    async def aclose(self) -> None:
        timer = self._timer
        self.cancel()
        if timer is not None:
            try:
                await timer
            except asyncio.CancelledError:
                pass

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _countdown(self) -> None:
        await asyncio.sleep(self._delay)
        # Past this point a new edit starts a fresh timer instead of
        # cancelling the save in flight
        self._timer = None
        await self._save_pending()

    async def _save_pending(self) -> bool:
        draft, self._pending = self._pending, None
        if draft is None or draft == self._last_saved:
            return False

        self._in_flight += 1
        try:
            await self._save(*draft)
        except Exception as e:
            self.last_error = str(e) or "Something went wrong"
            logger.warning(f"Autosave failed: {self.last_error}")
            return False
        finally:
            self._in_flight -= 1

        self._last_saved = draft
        self.last_error = None
        return True
