import enum
from typing import Callable, List, Optional


class ViewMode(enum.Enum):
    PUBLIC = "Public"
    ADMIN = "Admin"
    INSTRUCTOR = "Instructor"


class ViewModeState:
    """
    Which presentation context the UI is in, plus the instructor being viewed
    when the mode is INSTRUCTOR.

    Observers are plain callables taking no arguments. They run synchronously,
    in registration order, after the state has changed.
    """

    def __init__(self, mode: ViewMode = ViewMode.PUBLIC):
        self._mode = mode
        self.current_instructor_id: Optional[int] = None
        self._observers: List[Callable[[], None]] = []

    @property
    def mode(self) -> ViewMode:
        return self._mode

    def set_mode(self, mode: ViewMode) -> bool:
        """Returns True when the mode actually changed."""
        if mode == self._mode:
            return False

        self._mode = mode
        if mode != ViewMode.INSTRUCTOR:
            self.current_instructor_id = None

        for callback in list(self._observers):
            callback()
        return True

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._observers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        if callback in self._observers:
            self._observers.remove(callback)
