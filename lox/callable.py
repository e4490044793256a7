import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List

if TYPE_CHECKING:
    from lox.interpreter import Interpreter


class LoxCallable(ABC):
    """Anything a Lox call expression can invoke."""
    @abstractmethod
    def arity(self) -> int:
        ...

    @abstractmethod
    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        ...


@dataclass(eq=False)
class NativeFunction(LoxCallable):
    name: str
    param_count: int
    fn: Callable[[List[Any]], Any]

    def arity(self) -> int:
        return self.param_count

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        return self.fn(arguments)

    def __str__(self) -> str:
        return f"<native fn: {self.name}>"

    def __repr__(self) -> str:
        return f"<native fn: {self.name}>"


def native_clock(args: List[Any]) -> float:
    return time.time()


NATIVES = [
    NativeFunction('clock', 0, native_clock),
]
