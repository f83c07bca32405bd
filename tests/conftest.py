import pytest

from brainfuck import BrainfuckInterpreter, InterpreterConfig

# Canonical "Hello World!\n" programs
SIMPLE_HELLO = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)

# Exercises cell wraparound ("-[+]") and nested loops that walk the tape
COMPLEX_HELLO = (
    ">++++++++[-<+++++++++>]<.>>+>-[+]++>++>+++[>[->+++<<+++>]<<]>-----.>->"
    "+++..+++.>-.<<+[>[+>+]>>]<--------------.>>.+++.------.--------.>+.>+."
)

HELLO_OUTPUT = b"Hello World!\n"


@pytest.fixture
def interpreter():
    return BrainfuckInterpreter()


@pytest.fixture
def sparse_interpreter():
    return BrainfuckInterpreter(InterpreterConfig(addressing="sparse"))
