from dataclasses import dataclass
from enum import Enum

from fastreflect import (
    NO_VALUE,
    LookupCriteria,
    Visibility,
    call_method,
    delegate_for_call_method,
    delegate_for_call_static_method,
    resolve_many,
    resolve_one,
)


class TaskStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class Task:
    description: str
    status: TaskStatus = TaskStatus.PENDING


class Worker:
    def __init__(self, name: str) -> None:
        self.name = name
        self.tasks: list[Task] = []

    def assign(self, task: Task) -> None:
        self.tasks.append(task)

    def pending(self) -> int:
        return sum(1 for t in self.tasks if t.status == TaskStatus.PENDING)

    def _audit(self) -> str:
        return f"{self.name}: {len(self.tasks)} tasks"


class Reviewer(Worker):
    def approve(self, index: int) -> str:
        task = self.tasks[index]
        self.tasks[index] = Task(task.description, TaskStatus.COMPLETED)
        return task.description

    @staticmethod
    def quota(tasks: int, reviewers: int) -> int:
        return -(-tasks // reviewers)


def main() -> None:
    # Lookup walks the hierarchy unless told not to
    member = resolve_one(Reviewer, "pending")
    print(f"pending declared on: {member.declaring_type.__name__}")
    print(f"declared only: {resolve_one(Reviewer, 'pending', criteria=LookupCriteria().declared_only())}")

    public = LookupCriteria(visibility=Visibility.INSTANCE | Visibility.PUBLIC)
    print("public members:", [str(m) for m in resolve_many(Reviewer, criteria=public)])

    reviewer = Reviewer("ada")
    assign = delegate_for_call_method(Reviewer, "assign", Task)
    for description in ("Collect data", "Analyze data", "Generate report"):
        assert assign(reviewer, Task(description)) is NO_VALUE

    approve = delegate_for_call_method(Reviewer, "approve", int)
    # Lax conversion turns "0" into 0
    print(f"approved: {approve(reviewer, '0')}")
    print(f"pending: {call_method(reviewer, 'pending')}")
    print(f"audit: {call_method(reviewer, '_audit')}")

    quota = delegate_for_call_static_method(Reviewer, "quota", int, int)
    print(f"quota: {quota(7, 2)}")


if __name__ == "__main__":
    main()
