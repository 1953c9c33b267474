"""Answer containers and cross-backend consistency checks."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Answers:
    """Both puzzle answers for one schematic."""

    part1: int  # sum of numbers adjacent to a symbol
    part2: int  # sum of gear ratios

    def __str__(self) -> str:
        return f"part 1: {self.part1}\npart 2: {self.part2}"


def check_agreement(reference: Answers, candidate: Answers, label: str = "raster") -> None:
    """Check that two backends produced the same answers.

    Args:
        reference: Answers from the index backend
        candidate: Answers from the backend under test
        label: Name of the backend under test, for the error message

    Raises:
        AssertionError: If either answer differs
    """
    if reference == candidate:
        return

    raise AssertionError(
        f"Backends disagree!\n"
        f"  Part 1: index={reference.part1}, {label}={candidate.part1}\n"
        f"  Part 2: index={reference.part2}, {label}={candidate.part2}"
    )
