from typing import Optional, List, TextIO
from argparse import ArgumentParser, ArgumentTypeError
import logging
import sys

from vecsh.interpreters import MessageSet, Console, Shell, MAX_LINE


# Undecodable input bytes survive as lone surrogates and are written back unchanged.
ENCODING_ERRORS = 'surrogateescape'


def positive_int(text: 'str') -> 'int':
    try:
        value = int(text)
    except ValueError:
        raise ArgumentTypeError(f"invalid int value: '{text}'")
    if value <= 0:
        raise ArgumentTypeError(f"must be a positive integer: '{text}'")
    return value


def make_parser() -> 'ArgumentParser':
    parser = ArgumentParser(description='Interactive shell over a growable vector of strings.')
    parser.add_argument('files', metavar='File', type=str, nargs='*',
                        help='a script of shell commands, one per line (default: read stdin)')
    parser.add_argument('--max-line', metavar='N', type=positive_int, default=MAX_LINE,
                        help=f'reject command lines longer than N characters (default: {MAX_LINE})')
    parser.add_argument('--no-banner', action='store_true',
                        help='do not print the greeting line')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log debug messages to stderr')
    return parser


def run(shell: 'Shell', console: 'Console', ms: 'MessageSet') -> 'None':
    while shell.is_running:
        pos = console.read_command(ms)
        if pos is None:
            break
        shell.execute(pos)
        console.report(ms)


def main(argv: 'Optional[List[str]]' = None,
         stdin: 'Optional[TextIO]' = None, stdout: 'Optional[TextIO]' = None) -> 'int':
    args = make_parser().parse_args(argv)
    if stdin is None:
        stdin = sys.stdin
        stdin.reconfigure(errors=ENCODING_ERRORS)
    if stdout is None:
        stdout = sys.stdout
        stdout.reconfigure(errors=ENCODING_ERRORS)

    logging.basicConfig(stream=sys.stderr,
                        level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    ms = MessageSet()
    shell = Shell(ms, stdout)
    if len(args.files) == 0:
        console = Console(stdin, stdout, max_line=args.max_line)
        if not args.no_banner:
            console.greet()
        run(shell, console, ms)
    else:
        for filename in args.files:
            with open(filename, encoding='utf-8', errors=ENCODING_ERRORS) as f:
                run(shell, Console(f, stdout, filename, args.max_line, prompt=""), ms)
            if not shell.is_running:
                break
    return 0


if __name__ == '__main__':
    sys.exit(main())
