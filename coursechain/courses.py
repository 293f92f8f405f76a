"""Courses made of modules, with progress and completion tracking."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Sequence


class ModuleStatus(Enum):
    """How far a student has got with a module."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    COMPLETED = auto()


@dataclass
class Module:
    """One module of a course."""

    id: int
    name: str
    status: ModuleStatus = ModuleStatus.NOT_STARTED


@dataclass
class Course:
    """A course and the modules it is made of.

    `certificates` holds the certificate notices issued for the course and
    `events` the completion events emitted for it.
    """

    id: int
    name: str
    modules: list[Module] = field(default_factory=list)
    completed: bool = False
    certificates: list[str] = field(default_factory=list, compare=False, repr=False)
    events: list[str] = field(default_factory=list, compare=False, repr=False)

    def calculate_progress(self) -> float:
        """Return the share of completed modules as a percentage."""
        if not self.modules:
            return math.nan
        done = sum(1 for m in self.modules if m.status is ModuleStatus.COMPLETED)
        return done / len(self.modules) * 100.0

    def mark_course_completed(self) -> bool:
        """Mark the course completed if every module is; return whether it was."""
        if all(m.status is ModuleStatus.COMPLETED for m in self.modules):
            self.completed = True
            print(f"Course '{self.name}' is marked as completed.")
            self.issue_certificate()
            self.emit_course_completion_event()
            return True
        print(
            f"Cannot mark '{self.name}' as completed. "
            "Some modules are still incomplete."
        )
        return False

    def issue_certificate(self) -> None:
        """Record and announce a certificate for this course."""
        notice = f"Certificate issued for course '{self.name}'. Congratulations!"
        self.certificates.append(notice)
        print(notice)

    def emit_course_completion_event(self) -> None:
        """Record and announce the course completion event."""
        event = (
            f"Event: Course '{self.name}' completed successfully. "
            "Emitting course completion event."
        )
        self.events.append(event)
        print(event)


@dataclass
class CourseRegistry:
    """A collection of courses keyed by id."""

    courses: dict[int, Course] = field(default_factory=dict)

    def create_course(self, course: Course) -> None:
        """Add a course, replacing any course with the same id."""
        self.courses[course.id] = course

    def mark_course_completed_by_id(self, course_id: int) -> bool:
        """Try to complete the course with this id; return whether it was."""
        course = self.courses.get(course_id)
        if course is None:
            print(f"Course with ID {course_id} not found.")
            return False
        return course.mark_course_completed()


def main(argv: Sequence[str] | None = None) -> int:
    """Run a short demonstration of course completion."""
    registry = CourseRegistry()
    course = Course(
        id=101,
        name="Rust Programming Basics",
        modules=[
            Module(1, "Module 1", ModuleStatus.COMPLETED),
            Module(2, "Module 2", ModuleStatus.COMPLETED),
            Module(3, "Module 3", ModuleStatus.NOT_STARTED),
        ],
    )
    registry.create_course(course)
    registry.mark_course_completed_by_id(101)
    registry.courses[101].modules[2].status = ModuleStatus.COMPLETED
    registry.mark_course_completed_by_id(101)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())