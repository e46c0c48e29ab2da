from typing import Any, Optional, List, Iterator, TypeVar, Generic
import logging


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------


_E = TypeVar('_E')


class Vector(Generic[_E]):
    """ Ordered, variable-length sequence of handles.

        The vector owns its backing store of slots, but not the values
        referenced from those slots: whoever pushed a value stays responsible
        for it, and `remove`/`pop` give the removed handle back to the caller.

        Capacity starts at 1 and doubles whenever an insertion would overflow
        it. It never shrinks.

        Operations taking an index trust their caller: violating the
        documented precondition is a programming error and fails an
        assertion. Use `in_bounds` first.
    """

    def __init__(self) -> 'None':
        self.__slots: 'Optional[List[Any]]' = [None]
        self.__capacity = 1
        self.__size = 0

    @property
    def capacity(self) -> 'int':
        """ Returns the number of slots allocated in the backing store.
        """
        assert self.__slots is not None, "vector destroyed"
        return self.__capacity

    @property
    def is_destroyed(self) -> 'bool':
        return self.__slots is None

    def destroy(self) -> 'None':
        """ Releases the backing store. Stored values are left alone; the
            vector must not be used afterwards.
        """
        assert self.__slots is not None, "vector destroyed"
        self.__slots = None
        self.__capacity = self.__size = 0

    def size(self) -> 'int':
        assert self.__slots is not None, "vector destroyed"
        return self.__size

    def in_bounds(self, index: 'int') -> 'bool':
        """ Checks whether `index` refers to an existing element.
            Negative indices are never in bounds.
        """
        assert self.__slots is not None, "vector destroyed"
        return 0 <= index < self.__size

    def get(self, index: 'int') -> '_E':
        assert self.in_bounds(index)
        return self.__slots[index]

    def set(self, index: 'int', e: '_E') -> 'None':
        """ Overwrites the element at existing `index`. The replaced handle is
            not returned; read it with `get` beforehand if needed.
        """
        assert self.in_bounds(index)
        self.__slots[index] = e

    def insert(self, index: 'int', e: '_E') -> 'None':
        """ Inserts `e` at `index` (0 <= index <= size), shifting the
            elements starting at `index` one position to the right.
        """
        assert self.__slots is not None, "vector destroyed"
        assert 0 <= index <= self.__size
        self.__extend_if_necessary(self.__size + 1)
        self.__move(index, index + 1, self.__size - index)
        self.__slots[index] = e
        self.__size += 1

    def remove(self, index: 'int') -> '_E':
        """ Removes and returns the element at `index`, shifting the elements
            after it one position to the left.
        """
        assert self.in_bounds(index)
        e = self.__slots[index]
        self.__move(index + 1, index, self.__size - index - 1)
        self.__size -= 1
        self.__slots[self.__size] = None
        return e

    def push(self, e: '_E') -> 'None':
        self.insert(self.size(), e)

    def pop(self) -> '_E':
        assert self.size() > 0, "pop from empty vector"
        return self.remove(self.__size - 1)

    def __getitem__(self, index: 'int') -> '_E':
        return self.get(self.__normalize_index(index))

    def __setitem__(self, index: 'int', e: '_E') -> 'None':
        self.set(self.__normalize_index(index), e)

    def __iter__(self) -> 'Iterator[_E]':
        return (self.get(i) for i in range(self.size()))

    def __reversed__(self) -> 'Iterator[_E]':
        return (self.get(i) for i in reversed(range(self.size())))

    def __len__(self) -> 'int':
        return self.size()

    def __repr__(self) -> 'str':
        if self.__slots is None:
            return "Vector(<destroyed>)"
        return f"Vector({list(self)!r})"

    def __normalize_index(self, index: 'int') -> 'int':
        count = self.size()
        if index < 0:
            index += count
        if index < 0 or index >= count:
            raise IndexError(f"vector index {index} out of range")
        return index

    def __move(self, src: 'int', dst: 'int', count: 'int') -> 'None':
        # Slice assignment copies the source run before writing, so
        # overlapping runs are safe in both directions.
        if count > 0:
            self.__slots[dst: dst + count] = self.__slots[src: src + count]

    def __extend_if_necessary(self, size: 'int') -> 'None':
        if size > self.__capacity:
            capacity = self.__capacity * 2
            slots: 'List[Any]' = [None] * capacity
            slots[0: self.__size] = self.__slots[0: self.__size]
            logger.debug("vector grows from %d to %d slots", self.__capacity, capacity)
            self.__slots, self.__capacity = slots, capacity


# -----------------------------------------------------------------------------
