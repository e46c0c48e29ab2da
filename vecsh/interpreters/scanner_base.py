from typing import Any, Union, Optional, Set, Iterator, TypeVar, Generic, Callable
from abc import ABC, abstractmethod
from functools import total_ordering


# -----------------------------------------------------------------------------


@total_ordering
class Position:
    """ Location within a command line being scanned.

        A command line knows where it came from (e.g. "<stdin>" or a script
        name) and its line number there. Positions are immutable, so moving
        along the line creates new Position objects.

        Positions are hashable and comparable.
    """

    # Not a character, so it never collides with line contents.
    EOF = ""

    def __init__(self, source: 'str', line: 'int', text: 'str', offs: 'int') -> 'None':
        """ Private constructor, use `beginning_of` instead.
        """
        self.__source, self.__line = source, line
        self.__text, self.__offs = text, offs

    @staticmethod
    def beginning_of(source: 'str', text: 'str', line: 'int' = 1) -> 'Position':
        """ Returns the position of the first character of `text`, which is
            line number `line` of `source`.
        """
        return Position(source, line, text, 0)

    @property
    def line(self) -> 'int':
        """ Returns line number within the source (starting at 1).
        """
        return self.__line

    @property
    def col(self) -> 'int':
        return self.__offs + 1

    @property
    def text(self) -> 'str':
        return self.__text

    @property
    def at_eol(self) -> 'bool':
        return self.__offs >= len(self.__text)

    @property
    def ch(self) -> 'str':
        """ Returns current character (or `Position.EOF` past the end of line).
        """
        return Position.EOF if self.at_eol else self.__text[self.__offs]

    @property
    def next(self) -> 'Position':
        if self.at_eol:
            return self
        return Position(self.__source, self.__line, self.__text, self.__offs + 1)

    def get_image(self, follow: 'Position') -> 'str':
        """ Returns the text from current position till `follow`, not
            including the character at `follow`.
        """
        assert (self.__key()[:2] == follow.__key()[:2]) and (self <= follow)
        return self.__text[self.__offs: follow.__offs]

    def __key(self):
        return self.__source, self.__line, self.__offs

    def __eq__(self, other) -> 'bool':
        return self.__key() == other.__key()

    def __le__(self, other) -> 'bool':
        return self.__key() <= other.__key()

    def __hash__(self) -> 'int':
        return hash(self.__key())

    def __str__(self) -> 'str':
        return f"{self.__source}:{self.__line}:{self.col}"


# -----------------------------------------------------------------------------


@total_ordering
class Message(Exception):
    """ Error message tied to a position in the input.

        Messages are ordered by position, then by description. They may be
        raised to abandon parsing of a command.
    """

    def __init__(self, pos: 'Position', description: 'str') -> 'None':
        super().__init__(description)
        self.__pos, self.__description = pos, description

    @property
    def pos(self) -> 'Position':
        return self.__pos

    @property
    def description(self) -> 'str':
        return self.__description

    def __eq__(self, other) -> 'bool':
        return (self.pos, self.description) == (other.pos, other.description)

    def __le__(self, other) -> 'bool':
        return (self.pos, self.description) <= (other.pos, other.description)

    def __hash__(self) -> 'int':
        return hash((self.pos, self.description))

    def __str__(self) -> 'str':
        return f"{self.pos}: {self.description}"


class MessageSet:
    """ Collection of error messages; iterates them in sorted order.
    """

    def __init__(self) -> 'None':
        self.__messages: 'Set[Message]' = set()

    def add(self, msg: 'Message') -> 'None':
        self.__messages.add(msg)

    def clear(self) -> 'None':
        self.__messages.clear()

    def __len__(self) -> 'int':
        return len(self.__messages)

    def __iter__(self) -> 'Iterator[Message]':
        return iter(sorted(self.__messages))

    def __repr__(self) -> 'str':
        return f"MessageSet({len(self)} messages)"


# -----------------------------------------------------------------------------


TAG = TypeVar('TAG')

MatchCriterion = Union[str, Callable[[str], Any]]


class AbstractScanner(ABC, Generic[TAG]):
    """ Abstract base class for lexical scanners.

        The scanner keeps the current token as a `tag` (None at end of line)
        and the position where it starts. Subclasses implement `_scan`,
        which consumes one token and returns its tag.
    """

    def __init__(self, pos: 'Position', ms: 'MessageSet') -> 'None':
        self.__start: 'Optional[Position]' = None
        self.__follow = pos
        self.__ms = ms
        self.__tag = self._scan()

    @abstractmethod
    def _scan(self) -> 'Optional[TAG]':
        pass

    @property
    def start(self) -> 'Position':
        assert self.__start is not None
        return self.__start

    @property
    def tag(self) -> 'Optional[TAG]':
        return self.__tag

    @property
    def image(self) -> 'str':
        return self.start.get_image(self.__follow)

    def read_token(self) -> 'None':
        self.__start = None
        self.__tag = self._scan()

    def report(self, description: 'str') -> 'Message':
        msg = Message(self.start, description)
        self.__ms.add(msg)
        return msg

    def _consume(self, criterion: 'MatchCriterion') -> 'bool':
        if not self.__follow.at_eol and _satisfies(self.__follow.ch, criterion):
            self.__follow = self.__follow.next
            return True
        return False

    def _consume_while(self, criterion: 'MatchCriterion') -> 'None':
        while self._consume(criterion):
            pass

    def _consume_until(self, criterion: 'MatchCriterion') -> 'None':
        self._consume_while(lambda c: not _satisfies(c, criterion))

    def _at_eol(self) -> 'bool':
        return self.__follow.at_eol

    def _mark_start(self) -> 'None':
        self.__start = self.__follow


def _satisfies(ch: 'str', criterion: 'MatchCriterion') -> 'bool':
    return ch in criterion if isinstance(criterion, str) else criterion(ch)


# -----------------------------------------------------------------------------
