from typing import Optional, Mapping, Type, TextIO, Union
from enum import Enum, auto
import logging
import re
import sys

from vecsh.util import Vector
from vecsh.interpreters.scanner_base import Position, Message, MessageSet, AbstractScanner
from vecsh.interpreters.parser_base import Node, VoidVisitor


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------


class Tag(Enum):
    WORD = auto()
    NUMBER = auto()
    HELP = auto()
    EXIT = auto()
    INIT = auto()
    SIZE = auto()
    LIST = auto()
    SET = auto()
    GET = auto()
    INSERT = auto()
    REMOVE = auto()
    PUSH = auto()
    POP = auto()

    def __str__(self) -> 'str':
        return f"'{_tag_labels[self]}'"


_tag_labels: 'Mapping[Tag, str]' = {
    Tag.WORD: 'word',
    Tag.NUMBER: 'number',
    Tag.HELP: 'help',
    Tag.EXIT: 'exit',
    Tag.INIT: 'init',
    Tag.SIZE: 'size',
    Tag.LIST: 'ls',
    Tag.SET: 'set',
    Tag.GET: 'get',
    Tag.INSERT: 'insert',
    Tag.REMOVE: 'remove',
    Tag.PUSH: 'push',
    Tag.POP: 'pop',
}


# Integer literal as accepted by C `strtol` with base 0.
_NUMBER = re.compile(r'[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)')


def parse_index(image: 'str') -> 'int':
    """ Converts a NUMBER token to int: `0x` prefix is hexadecimal, a leading
        zero is octal, anything else decimal.
    """
    assert _NUMBER.fullmatch(image) is not None
    sign, digits = (-1, image[1:]) if image[0] == '-' else \
        (1, image[1:]) if image[0] == '+' else (1, image)
    if digits[:2] in ('0x', '0X'):
        return sign * int(digits[2:], 16)
    if len(digits) > 1 and digits[0] == '0':
        return sign * int(digits, 8)
    return sign * int(digits)


class Scanner(AbstractScanner[Tag]):
    """ Splits a command line into whitespace-delimited tokens.
    """

    __KEYWORDS: 'Mapping[str, Tag]' = {
        'help': Tag.HELP,
        'exit': Tag.EXIT,
        'quit': Tag.EXIT,
        'q': Tag.EXIT,
        'init': Tag.INIT,
        'size': Tag.SIZE,
        'ls': Tag.LIST,
        'dump': Tag.LIST,
        'print': Tag.LIST,
        'set': Tag.SET,
        'get': Tag.GET,
        'insert': Tag.INSERT,
        'remove': Tag.REMOVE,
        'push': Tag.PUSH,
        'pop': Tag.POP,
    }

    def _scan(self) -> 'Optional[Tag]':
        self._consume_while(str.isspace)
        self._mark_start()
        if self._at_eol():
            return None
        self._consume_until(str.isspace)
        if _NUMBER.fullmatch(self.image):
            return Tag.NUMBER
        return Scanner.__KEYWORDS.get(self.image, Tag.WORD)


# -----------------------------------------------------------------------------


class IndexNode(Node[Tag]):
    """
    index = NUMBER.
    """

    value: 'int'

    def _parse(self) -> 'None':
        self._expect(Tag.NUMBER)
        self.value = parse_index(self._image)
        self._next()


class ValueNode(Node[Tag]):
    """
    value = any token.
    """

    value: 'str'

    def _parse(self) -> 'None':
        self._expect(*Tag)
        self.value = self._image
        self._next()


class CommandNode(Node[Tag]):
    """
    command = keyword args.

    `name` keeps the spelling of the keyword, so that aliases are echoed back
    in usage errors. `ARGS` is the argument part of the usage format.
    """

    ARGS = ""

    name: 'str'

    @Node.recover
    def _parse(self) -> 'None':
        self.name = self._image
        self._next()
        self._parse_args()
        self._expect_end()

    def _parse_args(self) -> 'None':
        pass

    @property
    def usage(self) -> 'str':
        return f"{self.name}{self.ARGS}"


class HelpNode(CommandNode):
    """
    help = HELP.
    """


class ExitNode(CommandNode):
    """
    exit = EXIT.
    """


class InitNode(CommandNode):
    """
    init = INIT.
    """


class SizeNode(CommandNode):
    """
    size = SIZE.
    """


class ListNode(CommandNode):
    """
    list = LIST.
    """


class SetNode(CommandNode):
    """
    set = SET index value.
    """

    ARGS = " %d %[^ ]"

    index: 'IndexNode'
    value: 'ValueNode'

    def _parse_args(self) -> 'None':
        self.index = IndexNode(self)
        self.value = ValueNode(self)


class GetNode(CommandNode):
    """
    get = GET index.
    """

    ARGS = " %d"

    index: 'IndexNode'

    def _parse_args(self) -> 'None':
        self.index = IndexNode(self)


class InsertNode(CommandNode):
    """
    insert = INSERT index value.
    """

    ARGS = " %d %[^ ]"

    index: 'IndexNode'
    value: 'ValueNode'

    def _parse_args(self) -> 'None':
        self.index = IndexNode(self)
        self.value = ValueNode(self)


class RemoveNode(CommandNode):
    """
    remove = REMOVE index.
    """

    ARGS = " %d"

    index: 'IndexNode'

    def _parse_args(self) -> 'None':
        self.index = IndexNode(self)


class PushNode(CommandNode):
    """
    push = PUSH value.
    """

    ARGS = " %[^ ]"

    value: 'ValueNode'

    def _parse_args(self) -> 'None':
        self.value = ValueNode(self)


class PopNode(CommandNode):
    """
    pop = POP.
    """


class CommandLineNode(Node[Tag]):
    """
    command-line = [ command ].
    """

    CommandType = Union[HelpNode, ExitNode, InitNode, SizeNode, ListNode,
                        SetNode, GetNode, InsertNode, RemoveNode, PushNode, PopNode]

    content: 'Optional[CommandType]'

    __DISPATCH: 'Mapping[Tag, Type[CommandType]]' = {
        Tag.HELP: HelpNode,
        Tag.EXIT: ExitNode,
        Tag.INIT: InitNode,
        Tag.SIZE: SizeNode,
        Tag.LIST: ListNode,
        Tag.SET: SetNode,
        Tag.GET: GetNode,
        Tag.INSERT: InsertNode,
        Tag.REMOVE: RemoveNode,
        Tag.PUSH: PushNode,
        Tag.POP: PopNode,
    }

    def _parse(self) -> 'None':
        if self._at_end():
            self.content = None
            return
        tag = self._match(*CommandLineNode.__DISPATCH.keys())
        if tag is None:
            self._report_raise("unknown command")
        self.content = CommandLineNode.__DISPATCH[tag](self)


# -----------------------------------------------------------------------------


HELP = (
    "help                List available commands",
    "exit/quit/q         Exit vector shell",
    "init                Initialize new empty vector",
    "size                Get current vector size",
    "ls/print/dump       Get all vector contents",
    "set <i> <value>     Set <value> at index <i>",
    "get <i>             Get the value at index <i>",
    "insert <i> <value>  Insert <value> into index <i>",
    "remove <i>          Remove the value at index <i>",
    "push <value>        Push <value> to end of vector",
    "pop                 Remove the value at end of vector",
)

INDENT = "    "


class Shell(VoidVisitor[Tag]):
    """ Executes command lines against the session's vector.

        Output goes to `out`; errors are added to `ms` as messages and left
        for the caller to print. Each command line runs at most one vector
        operation, and only after its arguments have been validated.
    """

    def __init__(self, ms: 'MessageSet', out: 'Optional[TextIO]' = None) -> 'None':
        self.__ms = ms
        self.__out = sys.stdout if out is None else out
        self.__vector: 'Optional[Vector[str]]' = None
        self.__running = True

    @property
    def vector(self) -> 'Optional[Vector[str]]':
        return self.__vector

    @property
    def is_running(self) -> 'bool':
        return self.__running

    def execute(self, pos: 'Position') -> 'None':
        logger.debug("%s: %r", pos, pos.text)
        diagnostics = MessageSet()
        node = CommandLineNode(Scanner(pos, diagnostics))
        for m in diagnostics:
            logger.debug("%s", m)
        self._visit(node)

    def _visit_command_line_node(self, node: 'CommandLineNode') -> 'None':
        if node.content is not None:
            logger.debug("%s: %s", node.start, node.content.__class__.__name__)
            self._visit(node.content)

    def _visit_inconsistent_command_line_node(self, node: 'CommandLineNode') -> 'None':
        self.__error(node, "unknown command")

    def _visit_inconsistent_command_node(self, node: 'CommandNode') -> 'None':
        self.__error(node, f"use format `{node.usage}`")

    def _visit_help_node(self, _: 'HelpNode') -> 'None':
        for line in HELP:
            self.__print(line)

    def _visit_exit_node(self, _: 'ExitNode') -> 'None':
        self.__running = False

    def _visit_init_node(self, _: 'InitNode') -> 'None':
        if self.__vector is not None:
            self.__vector.destroy()
        self.__vector = Vector()
        self.__print("v = []")

    def _visit_size_node(self, node: 'SizeNode') -> 'None':
        v = self.__ensure_exists(node)
        if v is not None:
            self.__print(f"|v| = {v.size()}")

    def _visit_list_node(self, node: 'ListNode') -> 'None':
        v = self.__ensure_exists(node)
        if v is not None:
            self.__print(f"v = [{', '.join(v)}]")

    def _visit_set_node(self, node: 'SetNode') -> 'None':
        v = self.__ensure_exists(node)
        if v is None:
            return
        i, value = node.index.value, node.value.value
        if not v.in_bounds(i):
            self.__error(node.index, "out of bounds")
        else:
            v.set(i, value)
            self.__print(f"v[{i}] = {value}")

    def _visit_get_node(self, node: 'GetNode') -> 'None':
        v = self.__ensure_exists(node)
        if v is None:
            return
        i = node.index.value
        if not v.in_bounds(i):
            self.__error(node.index, "out of bounds")
        else:
            self.__print(f"v[{i}] = {v.get(i)}")

    def _visit_insert_node(self, node: 'InsertNode') -> 'None':
        v = self.__ensure_exists(node)
        if v is None:
            return
        i, value = node.index.value, node.value.value
        if not 0 <= i <= v.size():
            self.__error(node.index, "out of bounds")
        else:
            v.insert(i, value)
            self.__print(f"v[{i}] = {value}")

    def _visit_remove_node(self, node: 'RemoveNode') -> 'None':
        v = self.__ensure_exists(node)
        if v is None:
            return
        i = node.index.value
        if not v.in_bounds(i):
            self.__error(node.index, "out of bounds")
        else:
            value = v.remove(i)
            self.__print(f"# v[{i}] = {value}")

    def _visit_push_node(self, node: 'PushNode') -> 'None':
        v = self.__ensure_exists(node)
        if v is not None:
            value = node.value.value
            v.push(value)
            self.__print(f"v[{v.size() - 1}] = {value}")

    def _visit_pop_node(self, node: 'PopNode') -> 'None':
        v = self.__ensure_exists(node)
        if v is None:
            return
        if v.size() == 0:
            self.__error(node, "empty")
        else:
            value = v.pop()
            self.__print(f"# v[{v.size()}] = {value}")

    def __ensure_exists(self, node: 'CommandNode') -> 'Optional[Vector[str]]':
        if self.__vector is None:
            self.__error(node, "use `init` first to initialize a new empty vector")
        return self.__vector

    def __error(self, node: 'Node[Tag]', description: 'str') -> 'None':
        self.__ms.add(Message(node.start, description))

    def __print(self, text: 'str') -> 'None':
        print(INDENT + text, file=self.__out)


# -----------------------------------------------------------------------------
