"""Fixed-capacity FIFO of recent bin intensities with a running sum."""
from collections import deque


class SlidingWindow:
    """Keeps the last ``capacity`` intensities of a beam for its local mean.

    The running sum always equals the sum of the current contents. A zero
    capacity window stores nothing and its mean is 0.
    """

    def __init__(self, capacity: int = 5):
        if capacity < 0:
            raise ValueError(f"Window size must be non-negative: {capacity}")
        self.capacity = capacity
        self._values = deque()
        self.total = 0

    def __len__(self) -> int:
        return len(self._values)

    def size(self) -> int:
        return len(self._values)

    def push(self, value: int) -> None:
        """Append a value, evicting the oldest one when full."""
        if self.capacity == 0:
            return
        if len(self._values) >= self.capacity:
            self.total -= self._values.popleft()
        self._values.append(value)
        self.total += value

    def front(self) -> int:
        """Oldest value in the window."""
        if not self._values:
            raise IndexError("front() on an empty window")
        return self._values[0]

    def clear(self) -> None:
        self._values.clear()
        self.total = 0

    def resize(self, capacity: int) -> None:
        """Change the capacity; the window is emptied."""
        if capacity < 0:
            raise ValueError(f"Window size must be non-negative: {capacity}")
        self.capacity = capacity
        self.clear()

    def mean(self) -> int:
        """Integer local mean, 0 when the window is empty."""
        if not self._values:
            return 0
        return self.total // len(self._values)
