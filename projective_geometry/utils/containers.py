"""
Containers for homogeneous vectors and parametrised constructions.

Set groups elements of one type and dimension, e.g. the four arguments of
a cross ratio. ParameterList pairs a generating function t -> T with the
values computed from it, so curves can be sampled and then pushed through
further constructions with chain().
"""

from __future__ import annotations
from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar


T = TypeVar("T")
U = TypeVar("U")

Entry = Tuple[Optional[complex], T]


class Set:
    """
    Ordered collection of at least two homogeneous vectors.

    All elements must be of the same type and have the same number of
    coordinates.
    """

    def __init__(self, *elements):
        """
        Args:
            *elements: HVector instances, or a single iterable of them

        Raises:
            ValueError: If fewer than two elements are given, or their types
                        or coordinate counts differ
            TypeError: If an element is not an HVector
        """
        from ..core.base import HVector

        if len(elements) == 1 and not isinstance(elements[0], HVector):
            elements = tuple(elements[0])
        if len(elements) <= 1:
            raise ValueError("Set must contain at least two elements")
        for i, element in enumerate(elements):
            if not isinstance(element, HVector):
                raise TypeError(f"Element {i} is {type(element).__name__}, expected HVector")
            if len(element) != len(elements[0]):
                raise ValueError("Elements of a set must have the same number of coordinates")
            if type(element) is not type(elements[0]):
                raise ValueError("Elements of a set must be of the same type")
        self._elements = tuple(elements)

    def __getitem__(self, index: int):
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    @property
    def count(self) -> int:
        return len(self._elements)

    @property
    def hvector_dimension(self) -> int:
        """Number of coordinates of each element."""
        return len(self._elements[0])

    def to_hvectors(self) -> Set:
        """Same elements as plain HVectors."""
        from ..core.base import HVector

        return Set(*(HVector(e) for e in self._elements))

    def __repr__(self) -> str:
        return f"Set({', '.join(repr(e) for e in self._elements)})"


class ParameterList(Generic[T]):
    """
    Values of type T together with the parameters they were computed from.

    Values added without calculation carry the parameter None. None results
    of the function are never stored.

    Example:
        >>> points = ParameterList(lambda t: Point2D(1, t.real, t.real ** 2))
        >>> points.add_range_of_parameters([-1, 0, 1])
        >>> images = points.chain(collineation.map)
    """

    def __init__(self, function: Callable[[complex], Optional[T]]):
        self.function = function
        self.values_and_parameters: List[Entry] = []

    def __len__(self) -> int:
        return len(self.values_and_parameters)

    @property
    def count(self) -> int:
        return len(self.values_and_parameters)

    @property
    def values(self) -> List[T]:
        return [value for _, value in self.values_and_parameters]

    def add(self, t: complex) -> Optional[T]:
        """Compute function(t) and store it unless it is None."""
        value = self.function(t)
        if value is not None:
            self.values_and_parameters.append((t, value))
        return value

    def add_value(self, value: Optional[T], t: Optional[complex] = None) -> None:
        """Store a value without calculation; t is not checked against function(t)."""
        if value is not None:
            self.values_and_parameters.append((t, value))

    def add_entry(self, entry: Optional[Entry]) -> None:
        if entry is not None and entry[1] is not None:
            self.values_and_parameters.append(entry)

    def add_range(self, values: Iterable[Optional[T]]) -> None:
        for value in values:
            self.add_value(value)

    def add_entries(self, entries: Iterable[Optional[Entry]]) -> None:
        for entry in entries:
            self.add_entry(entry)

    def add_range_of_parameters(self, parameters: Iterable[complex]) -> None:
        """Compute and store function(t) for every t."""
        for t in parameters:
            self.add(t)

    def chain(self, function: Callable[[T], Optional[U]]) -> ParameterList[U]:
        """
        Derive a list of function(value) for every stored value.

        The derived list generates new elements with t -> function(self.function(t)).
        """
        def chained(t: complex) -> Optional[U]:
            value = self.function(t)
            return None if value is None else function(value)

        result: ParameterList[U] = ParameterList(chained)
        for t, value in self.values_and_parameters:
            if t is None:
                result.add_value(function(value))
            else:
                image = function(value)
                if image is not None:
                    result.add_entry((t, image))
        return result

    def __repr__(self) -> str:
        return f"ParameterList(count={len(self)})"
