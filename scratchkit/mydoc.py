"""A tiny example of documented students and teachers."""

from dataclasses import dataclass, field

VERSION = "v1.0.0"


@dataclass
class Stu:
    """A student who gains code by studying."""

    name: str
    _code: int = field(default=0, init=False, repr=False)

    @property
    def code(self):
        return self._code

    def study(self):
        """Add one to the student's code."""
        self._code += 1


@dataclass
class Teacher:
    """A teacher."""

    name: str


def meet(teacher, stu):
    """Print the greetings exchanged between a teacher and a student."""
    print(f"{teacher.name}: Hello {stu.name}")
    print(f"{stu.name}: Hello Mr.{teacher.name}")


def version():
    """Print the module version and return it."""
    print(VERSION)
    return VERSION