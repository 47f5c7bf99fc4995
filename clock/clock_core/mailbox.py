"""
ResultMailbox - single-slot handoff from the fetch worker to the Tk thread.

The worker calls send() exactly once at the end of its run; the Tk thread
calls try_receive() every frame. Neither side ever blocks.
"""

import queue


class ResultMailbox:

    def __init__(self):
        self._slot = queue.Queue(maxsize=1)

    def send(self, outcome):
        """Deposit an outcome, replacing any value nobody collected."""
        while True:
            try:
                self._slot.put_nowait(outcome)
                return
            except queue.Full:
                self.clear()

    def try_receive(self):
        """Take the pending outcome, or None if the slot is empty."""
        try:
            return self._slot.get_nowait()
        except queue.Empty:
            return None

    def clear(self):
        try:
            self._slot.get_nowait()
        except queue.Empty:
            pass

    @property
    def has_value(self) -> bool:
        return not self._slot.empty()
