from vecsh.interpreters.scanner_base import Position, Message, MessageSet, AbstractScanner
from vecsh.interpreters.parser_base import Node, Visitor, VoidVisitor
from vecsh.interpreters.console import Console, MAX_LINE, PROMPT, BANNER
from vecsh.interpreters.shell import Tag, Scanner, Shell
