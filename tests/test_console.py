from unittest import TestCase
from textwrap import dedent
from io import StringIO
from contextlib import redirect_stderr
import os
import shutil
import tempfile

from vecsh.interpreters import Message, MessageSet, Console, Position, BANNER
from vecsh.main import main


# -----------------------------------------------------------------------------


class TestConsole(TestCase):
    def test_reads_lines_with_prompt(self):
        out = StringIO()
        console = Console(StringIO("init\npush a\n"), out)
        ms = MessageSet()

        pos = console.read_command(ms)
        self.assertEqual("init", pos.text)
        self.assertEqual(1, pos.line)
        pos = console.read_command(ms)
        self.assertEqual("push a", pos.text)
        self.assertEqual(2, pos.line)
        self.assertIsNone(console.read_command(ms))
        self.assertEqual("> > > ", out.getvalue())

    def test_last_line_without_newline(self):
        console = Console(StringIO("ls"), StringIO(), prompt="")
        self.assertEqual("ls", console.read_command(MessageSet()).text)

    def test_crlf_is_stripped(self):
        console = Console(StringIO("size\r\n"), StringIO())
        self.assertEqual("size", console.read_command(MessageSet()).text)

    def test_long_line_is_rejected_and_reprompted(self):
        out = StringIO()
        long_line = "push " + "x" * 76
        text = "push " + "y" * 75 + "\n" + long_line + "\nsize\n"
        console = Console(StringIO(text), out)
        ms = MessageSet()

        self.assertEqual(80, len(console.read_command(ms).text))
        pos = console.read_command(ms)
        self.assertEqual("size", pos.text)
        self.assertEqual(3, pos.line)
        self.assertEqual(0, len(ms))
        self.assertEqual("> > " + "    error; line too long (> 80)\n" + "> ", out.getvalue())

    def test_custom_max_line(self):
        out = StringIO()
        console = Console(StringIO("push abc\n"), out, max_line=5, prompt="")
        self.assertIsNone(console.read_command(MessageSet()))
        self.assertEqual("    error; line too long (> 5)\n", out.getvalue())

    def test_report(self):
        out = StringIO()
        console = Console(StringIO(), out)
        ms = MessageSet()
        pos = Position.beginning_of("<stdin>", "pop")
        ms.add(Message(pos, "empty"))
        console.report(ms)
        self.assertEqual("    error; empty\n", out.getvalue())
        self.assertEqual(0, len(ms))

    def test_greet(self):
        out = StringIO()
        Console(StringIO(), out).greet()
        self.assertEqual(BANNER + "\n", out.getvalue())


# -----------------------------------------------------------------------------


class TestMain(TestCase):
    def test_interactive_session(self):
        stdin = StringIO(dedent("""\
            push a
            init
            push a
            push b
            insert 1 x
            bogus
            get 3
            ls
            pop
            q
            push never
        """))
        stdout = StringIO()
        self.assertEqual(0, main([], stdin, stdout))
        expected = dedent("""\
            Vector CLI; use `help` if you are totally lost.
            >     error; use `init` first to initialize a new empty vector
            >     v = []
            >     v[0] = a
            >     v[1] = b
            >     v[1] = x
            >     error; unknown command
            >     error; out of bounds
            >     v = [a, x, b]
            >     # v[2] = b
            > """)
        self.assertEqual(expected, stdout.getvalue())

    def test_end_of_input(self):
        stdout = StringIO()
        self.assertEqual(0, main(["--no-banner"], StringIO("init\npop\n"), stdout))
        self.assertEqual(">     v = []\n>     error; empty\n> ", stdout.getvalue())

    def test_script_files(self):
        test_dir = tempfile.mkdtemp()
        try:
            first = os.path.join(test_dir, "first.txt")
            second = os.path.join(test_dir, "second.txt")
            third = os.path.join(test_dir, "third.txt")
            with open(first, "w") as f:
                f.write("init\npush a\n")
            with open(second, "w") as f:
                f.write("push b\nls\nexit\nls\n")
            with open(third, "w") as f:
                f.write("ls\n")

            stdout = StringIO()
            self.assertEqual(0, main([first, second, third], StringIO(), stdout))
            self.assertEqual("    v = []\n    v[0] = a\n    v[1] = b\n    v = [a, b]\n",
                             stdout.getvalue())
        finally:
            shutil.rmtree(test_dir)

    def test_script_with_undecodable_bytes(self):
        test_dir = tempfile.mkdtemp()
        try:
            script = os.path.join(test_dir, "latin1.txt")
            with open(script, "wb") as f:
                f.write(b"init\npush caf\xe9\nsize\n")

            stdout = StringIO()
            self.assertEqual(0, main([script], StringIO(), stdout))
            self.assertEqual("    v = []\n    v[0] = caf\udce9\n    |v| = 1\n", stdout.getvalue())
            self.assertEqual(b"caf\xe9", "caf\udce9".encode("utf-8", "surrogateescape"))
        finally:
            shutil.rmtree(test_dir)

    def test_max_line_must_be_positive(self):
        for value in ["0", "-3", "ten"]:
            with self.subTest(value=value):
                with redirect_stderr(StringIO()), self.assertRaises(SystemExit) as cm:
                    main(["--max-line", value], StringIO(), StringIO())
                self.assertEqual(2, cm.exception.code)

    def test_max_line_option(self):
        stdout = StringIO()
        main(["--no-banner", "--max-line", "4"], StringIO("init\npush a\n"), stdout)
        self.assertEqual(">     v = []\n>     error; line too long (> 4)\n> ", stdout.getvalue())


# -----------------------------------------------------------------------------
