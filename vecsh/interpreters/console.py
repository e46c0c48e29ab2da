from typing import Optional
from typing_extensions import Protocol
from abc import abstractmethod

from vecsh.interpreters.scanner_base import Position, Message, MessageSet


# -----------------------------------------------------------------------------


class LineSource(Protocol):
    @abstractmethod
    def readline(self) -> 'str':
        pass


class LineSink(Protocol):
    @abstractmethod
    def write(self, s: 'str') -> 'int':
        pass

    @abstractmethod
    def flush(self) -> 'None':
        pass


MAX_LINE = 80
PROMPT = "> "
BANNER = "Vector CLI; use `help` if you are totally lost."


class Console:
    """ Line-oriented front end of the shell.

        Reads command lines from `source`, prompting on `sink` before each
        one, and prints collected error messages. A line longer than
        `max_line` characters is rejected as a whole and the user prompted
        again; it is never truncated.
    """

    def __init__(self, source: 'LineSource', sink: 'LineSink', name: 'str' = "<stdin>",
                 max_line: 'int' = MAX_LINE, prompt: 'str' = PROMPT) -> 'None':
        self.__source, self.__sink = source, sink
        self.__name = name
        self.__max_line = max_line
        self.__prompt = prompt
        self.__line = 0

    @property
    def max_line(self) -> 'int':
        return self.__max_line

    def greet(self) -> 'None':
        self.__write(BANNER + "\n")

    def read_command(self, ms: 'MessageSet') -> 'Optional[Position]':
        """ Returns the position of the next acceptable command line, or None
            once the input is exhausted.
        """
        while True:
            if self.__prompt:
                self.__write(self.__prompt)
            line = self.__source.readline()
            if line == "":
                return None
            self.__line += 1
            text = line.rstrip("\r\n")
            pos = Position.beginning_of(self.__name, text, self.__line)
            if len(text) <= self.__max_line:
                return pos
            ms.add(Message(pos, f"line too long (> {self.__max_line})"))
            self.report(ms)

    def report(self, ms: 'MessageSet') -> 'None':
        for m in ms:
            self.__write(f"    error; {m.description}\n")
        ms.clear()

    def __write(self, text: 'str') -> 'None':
        self.__sink.write(text)
        self.__sink.flush()


# -----------------------------------------------------------------------------
