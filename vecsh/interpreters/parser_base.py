from typing import Union, Optional, List, MutableMapping, TypeVar, Generic, Callable, NoReturn
from abc import ABC, abstractmethod
import re

from vecsh.interpreters.scanner_base import Position, Message, AbstractScanner


# -----------------------------------------------------------------------------


TAG = TypeVar('TAG')


class Node(Generic[TAG], ABC):
    """ Syntax tree node built by recursive descent.

        Constructing a node parses it from the scanner's current token. The
        node built directly over a scanner is the root: a `Message` raised
        while parsing it is swallowed, leaving the node inconsistent. Inner
        nodes let the message propagate unless their `_parse` is wrapped
        with `Node.recover`.

        A node is consistent when parsing did not fail and every public
        annotated attribute has been assigned.
    """

    __scanner: 'AbstractScanner[TAG]'
    __start: 'Position'
    __failed: 'bool'

    def __init__(self, parent: 'Union[AbstractScanner[TAG], Node[TAG]]') -> 'None':
        is_root = isinstance(parent, AbstractScanner)
        self.__scanner = parent if is_root else parent.__scanner
        self.__start = self.__scanner.start
        self.__failed = False
        if is_root:
            try:
                self._parse()
            except Message:
                self.__failed = True
        else:
            self._parse()
        self.__is_consistent = not self.__failed and \
            all(hasattr(self, a) for a in Node.__get_required_attrs(self.__class__))

    @abstractmethod
    def _parse(self) -> 'None':
        pass

    @property
    def start(self) -> 'Position':
        return self.__start

    @property
    def is_consistent(self) -> 'bool':
        return self.__is_consistent

    @property
    def _image(self) -> 'str':
        return self.__scanner.image

    def _next(self) -> 'Optional[TAG]':
        self.__scanner.read_token()
        return self.__scanner.tag

    def _at_end(self) -> 'bool':
        return self.__scanner.tag is None

    def _match(self, *tags: 'TAG') -> 'Optional[TAG]':
        assert len(tags) > 0
        if any(self.__scanner.tag == tag for tag in tags):
            return self.__scanner.tag
        return None

    def _expect(self, *tags: 'TAG') -> 'TAG':
        tag_opt = self._match(*tags)
        if tag_opt is not None:
            return tag_opt
        tag_list = ", ".join(sorted(map(str, tags)))
        description = ("%s expected" if len(tags) == 1 else "any of %s expected") % tag_list
        self._report_raise(description)

    def _expect_end(self) -> 'None':
        if not self._at_end():
            self._report_raise("end of line expected")

    def _report(self, description: 'str') -> 'Message':
        return self.__scanner.report(description)

    def _report_raise(self, description: 'str') -> NoReturn:
        raise self._report(description)

    @staticmethod
    def recover(node_parse: 'Callable[[Node[TAG]], None]'):
        """ Wraps `_parse` so that a failure marks the node inconsistent and
            skips the rest of the line instead of failing the parent.
        """
        def parse_wrapper(self: 'Node[TAG]') -> 'None':
            try:
                node_parse(self)
            except Message:
                self.__failed = True
                while not self._at_end():
                    self.__scanner.read_token()
        return parse_wrapper

    __required_attrs: 'MutableMapping[type, List[str]]' = {}

    @staticmethod
    def __get_required_attrs(cls: 'type') -> 'List[str]':
        attrs = Node.__required_attrs.get(cls)
        if attrs is None:
            names = set()
            for κ in cls.__mro__:
                for σ in getattr(κ, '__annotations__', {}):
                    if not σ.startswith("_"):
                        names.add(σ)
            Node.__required_attrs[cls] = attrs = sorted(names)
        return attrs


# -----------------------------------------------------------------------------


R = TypeVar('R')


class Visitor(Generic[TAG, R]):
    """ Dispatches a node to `_visit_<snake_case_class_name>`, trying the
        node's class first and then its base classes. Inconsistent nodes go
        to `_visit_inconsistent_<name>` instead.
    """

    def _visit(self, node: 'Node[TAG]', *args) -> 'R':
        prefix = "_visit_" if node.is_consistent else "_visit_inconsistent_"
        for κ in node.__class__.__mro__:
            if isinstance(κ, type) and issubclass(κ, Node):
                method = getattr(self, prefix + Visitor.__get_name(κ), None)
                if method is not None:
                    return method(node, *args)
        raise AssertionError("method not found")

    __names: 'MutableMapping[type, str]' = {}
    __WORD_START = re.compile(r'(?<!^)(?=[A-Z])')

    @staticmethod
    def __get_name(cls: 'type') -> 'str':
        name = Visitor.__names.get(cls)
        if name is None:
            name = Visitor.__WORD_START.sub("_", cls.__name__).lower()
            Visitor.__names[cls] = name
        return name


class VoidVisitor(Generic[TAG], Visitor[TAG, None]):
    def _visit_inconsistent_node(self, node: 'Node') -> 'None':
        pass


# -----------------------------------------------------------------------------
