from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from models.query import AggregateRequest


class BaseRepository(ABC):
    """
    Base contract for anything that executes aggregate requests.
    Repositories receive a fully normalized request and return rows.
    No normalization, no shaping, no retries here.

    Execution errors (connectivity, syntax) propagate unchanged.
    """

    @abstractmethod
    def execute(self, request: AggregateRequest, distinct_rows: bool = False) -> List[Sequence[Any]]:
        """
        Return result rows, one sequence per row with one value per
        request field, in field order. With `distinct_rows`, each row is
        a distinct group of the plain fields.
        """
        pass
