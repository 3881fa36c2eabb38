"""
PetClinic Backend — Write Plans
=================================

What:  The explicit list of single-row writes that make up one logical write.
How:   A service builds a WritePlan of (table, row key, writer) steps and
       executes it. Steps run strictly in order, each awaited before the
       next is issued, because later keys depend on data confirmed earlier
       (the owner-partition copy of a pet is written only after the pet's
       primary row).

Failure Semantics:
    The store has no multi-row transaction, so nothing is rolled back.
    When step N fails, steps 1..N-1 stay applied and the plan raises
    StorageError listing which row keys were written and which one failed.
    Every step is an upsert (or delete) by key, so re-running the whole
    logical write converges on the intended state.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List

from petclinic.exceptions import MappingError, StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowWrite:
    """One single-row write: which row it targets and the coroutine that writes it."""
    table: str
    key: Dict[str, Any]
    write: Callable[[], Awaitable[Any]]

    def describe(self) -> str:
        key = ", ".join(f"{name}={value}" for name, value in self.key.items())
        return f"{self.table}({key})"


class WritePlan:
    """
    Ordered single-row writes for one logical operation.

    Example:
        await (
            WritePlan("create_pet")
            .add(PET_TABLE, {"id": pet.id}, lambda: pets.save(pet))
            .add(PET_BY_OWNER_TABLE, {"owner_id": pet.owner_id, "pet_id": pet.id},
                 lambda: pets.save_owner_partition(pet))
            .execute()
        )
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self._steps: List[RowWrite] = []

    def add(self, table: str, key: Dict[str, Any], write: Callable[[], Awaitable[Any]]) -> "WritePlan":
        self._steps.append(RowWrite(table=table, key=key, write=write))
        return self

    @property
    def steps(self) -> List[RowWrite]:
        return list(self._steps)

    async def execute(self) -> None:
        completed: List[str] = []
        for step in self._steps:
            try:
                await step.write()
            except MappingError:
                raise
            except Exception as e:
                logger.error(
                    "%s stopped at %s after %d of %d writes: %s",
                    self.operation,
                    step.describe(),
                    len(completed),
                    len(self._steps),
                    str(e),
                )
                message = "A storage operation failed. Please try again later."
                if completed:
                    message = (
                        f"The {self.operation.replace('_', ' ')} was only partially applied. "
                        "Retrying the same request is safe."
                    )
                context = dict(e.context) if isinstance(e, StorageError) else {}
                context.update(
                    {
                        "completed": list(completed),
                        "failed": step.describe(),
                        "error_type": type(e).__name__,
                    }
                )
                raise StorageError(
                    message=message,
                    table=step.table,
                    operation=self.operation,
                    context=context,
                ) from e
            completed.append(step.describe())
            logger.debug("%s wrote %s", self.operation, step.describe())
