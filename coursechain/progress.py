"""Per-user, per-course module progress tracking."""

from __future__ import annotations

from enum import IntEnum

from coursechain.env import Env


class ProgressErrorCode(IntEnum):
    """Error codes reported by the progress contract."""

    ALREADY_INITIALIZED = 1
    NOT_INITIALIZED = 2
    UNAUTHORIZED = 3
    COURSE_NOT_FOUND = 4
    INVALID_PROGRESS = 5


class ProgressError(Exception):
    """A progress contract call failed."""

    def __init__(self, code: ProgressErrorCode) -> None:
        super().__init__(code.name)
        self.code = code


class Progress:
    """Tracks which modules of which courses each user has completed.

    Modules are numbered from 1; a user's progress for a course is a list
    of flags whose index 0 is unused.
    """

    def __init__(self, env: Env) -> None:
        self.env = env
        self._admin: str | None = None
        self._courses: dict[str, int] = {}
        self._user_progress: dict[str, dict[str, list[bool]]] = {}

    def initialize(self, admin: str) -> None:
        """Set the admin; may be done once only."""
        if self._admin is not None:
            raise ProgressError(ProgressErrorCode.ALREADY_INITIALIZED)
        self.env.require_auth(admin)
        self._admin = admin

    def add_course(self, course_id: str, total_modules: int) -> None:
        """Register a course with its number of modules; admin only."""
        if self._admin is None:
            raise ProgressError(ProgressErrorCode.NOT_INITIALIZED)
        self.env.require_auth(self._admin)
        self._courses[course_id] = total_modules

    def get_course_modules(self, course_id: str) -> int:
        """Return the number of modules of a course."""
        try:
            return self._courses[course_id]
        except KeyError:
            raise ProgressError(ProgressErrorCode.COURSE_NOT_FOUND) from None

    def update_progress(
        self, user: str, course_id: str, module: int, completed: bool
    ) -> None:
        """Record whether `user` has completed `module` of a course."""
        self.env.require_auth(user)
        total_modules = self.get_course_modules(course_id)
        if module == 0 or module > total_modules:
            raise ProgressError(ProgressErrorCode.INVALID_PROGRESS)
        courses = self._user_progress.setdefault(user, {})
        flags = courses.setdefault(course_id, [False] * (total_modules + 1))
        if module >= len(flags):
            raise IndexError("module lies beyond the recorded progress")
        flags[module] = completed

    def get_progress(self, user: str, course_id: str) -> list[bool]:
        """Return a copy of the user's progress flags for a course."""
        self.get_course_modules(course_id)
        try:
            return list(self._user_progress[user][course_id])
        except KeyError:
            raise ProgressError(ProgressErrorCode.NOT_INITIALIZED) from None

    def get_completion_percentage(self, user: str, course_id: str) -> int:
        """Return the whole-number percentage of modules completed."""
        progress = self.get_progress(user, course_id)
        total = len(progress) - 1
        if total == 0:
            return 0
        completed = sum(1 for done in progress[1:] if done)
        return completed * 100 // total