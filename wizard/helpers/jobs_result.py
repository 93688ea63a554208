from enum import Enum
from enum import auto


class JobResult(Enum):
    GOOD = auto()
    BAD = auto()


class OperationError:
    def __init__(self, subject: str, log: str):
        self.subject = subject
        self.log = log

    def __eq__(self, other):
        return other == JobResult.BAD

    def __repr__(self):
        return f'{self.subject} operation finished unsuccessful:\n{self.log}'


def all_good(results: dict[str, JobResult | OperationError]) -> bool:
    return all(result == JobResult.GOOD for result in results.values())
