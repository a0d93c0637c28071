from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from blparse.bl_ast import Call, Condition, If, IfElse, Program, Statement, While
from blparse.bl_constants import CONDITIONS, PRIMITIVES
from blparse.bl_parser import parse_block, parse_program
from blparse.bl_printer import PrettyPrinter, pretty_print
from blparse.bl_tokenizer import Tokenizer

names = st.from_regex(r"[a-z][a-z0-9-]{0,6}", fullmatch=True).filter(
    lambda s: s not in CONDITIONS
)
conditions = st.sampled_from(list(Condition))


def statements(max_leaves: int = 12) -> st.SearchStrategy[Statement]:
    def extend(children: st.SearchStrategy[Any]) -> st.SearchStrategy[Statement]:
        block = st.lists(children, max_size=3).map(tuple)
        return st.one_of(
            st.builds(If, conditions, block),
            st.builds(IfElse, conditions, block, block),
            st.builds(While, conditions, block),
        )

    return st.recursive(st.builds(Call, names), extend, max_leaves=max_leaves)


blocks = st.lists(statements(), max_size=4).map(tuple)


@composite
def programs(draw: Any) -> Program:
    instruction_names = draw(
        st.lists(
            names.filter(lambda s: s not in PRIMITIVES), unique=True, max_size=4
        )
    )
    context = {name: draw(blocks) for name in instruction_names}
    return Program(draw(names), context, draw(blocks))


def test_empty_program() -> None:
    assert pretty_print(Program("p")) == "PROGRAM p IS\n\nBEGIN\nEND p\n"


def test_program_layout() -> None:
    program = Program(
        "walker",
        {"hop": (Call("move"), Call("move"))},
        (
            While(
                Condition.LESS,
                (
                    IfElse(Condition.EQUAL, (Call("hop"),), ()),
                    If(Condition.MORE, (Call("skip"),)),
                ),
            ),
        ),
    )
    assert pretty_print(program) == (
        "PROGRAM walker IS\n"
        "\n"
        "    INSTRUCTION hop IS\n"
        "        move\n"
        "        move\n"
        "    END hop\n"
        "\n"
        "BEGIN\n"
        "    WHILE less DO\n"
        "        IF equal THEN\n"
        "            hop\n"
        "        ELSE\n"
        "        END IF\n"
        "        IF more THEN\n"
        "            skip\n"
        "        END IF\n"
        "    END WHILE\n"
        "END walker\n"
    )


def test_block_layout() -> None:
    block = (Call("move"), While(Condition.NOT_EQUAL, (Call("infect"),)))
    assert pretty_print(block) == "move\nWHILE not-equal DO\n    infect\nEND WHILE\n"


def test_print_program_rejects_other_types() -> None:
    with pytest.raises(TypeError, match="Expected Program"):
        PrettyPrinter().print_program((Call("move"),))  # type: ignore[arg-type]


def test_visit_rejects_non_statement() -> None:
    with pytest.raises(TypeError, match="Expected a BL statement"):
        PrettyPrinter().print_block(("move",))  # type: ignore[arg-type]


def test_visit_unknown_kind() -> None:
    class Goto:
        kind = "goto"

    with pytest.raises(NotImplementedError, match="goto"):
        PrettyPrinter().print_block((Goto(),))  # type: ignore[arg-type]


@settings(max_examples=60)  # type: ignore[misc]
@given(program=programs())  # type: ignore[misc]
def test_program_round_trip(program: Program) -> None:
    source = pretty_print(program)
    assert parse_program(Tokenizer.tokens(source)) == program


@given(block=blocks)  # type: ignore[misc]
def test_block_round_trip(block: tuple[Statement, ...]) -> None:
    assert parse_block(Tokenizer.tokens(pretty_print(block))) == block


def test_reparse_of_handwritten_source() -> None:
    source = """
    PROGRAM p IS INSTRUCTION a IS IF less THEN move ELSE skip END IF END a
    BEGIN WHILE more DO a END WHILE END p
    """
    program = parse_program(Tokenizer.tokens(source))
    printed = pretty_print(program)
    assert parse_program(Tokenizer.tokens(printed)) == program
    assert pretty_print(parse_program(Tokenizer.tokens(printed))) == printed


def test_single_statement() -> None:
    assert pretty_print(If(Condition.LESS, (Call("go"),))) == (
        "IF less THEN\n    go\nEND IF\n"
    )
    assert PrettyPrinter().print_statement(Call("move")) == "move\n"


@given(stmt=statements())  # type: ignore[misc]
def test_statement_round_trip(stmt: Statement) -> None:
    assert parse_block(Tokenizer.tokens(pretty_print(stmt))) == (stmt,)
