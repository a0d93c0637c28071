"""
Renders parsed BL trees back into BL source.

This module defines the `PrettyPrinter` class, which walks a `Program`, a block or a
single statement and produces canonically indented BL text. The output re-tokenizes
and re-parses into a tree equal to the one printed.

Layout:
    - Instruction definitions and the main body sit one level inside the program.
    - Each nested block adds one more level.
    - A blank line separates instructions from each other and from BEGIN.

Raises:
    - `TypeError`: If something other than a `Program` or statement is printed.
    - `NotImplementedError`: If a statement kind has no corresponding emitter.
"""

from blparse.bl_ast import Block, Call, If, IfElse, Program, Statement, While


class PrettyPrinter:
    """Emits BL source from parsed trees.

    Attributes:
        lines (list[str]): Accumulated lines of emitted source.
        indent (int): Current indentation level.
    """

    INDENT = "    "

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return self.INDENT * self.indent

    def emit_line(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}" if text else "")

    def get_output(self) -> str:
        return "\n".join(self.lines) + "\n"

    def _visit(self, node: Statement) -> None:
        method = getattr(self, f"emit_{getattr(node, 'kind', None)}", None)
        if method is None:
            if not hasattr(node, "kind"):
                raise TypeError(f"Expected a BL statement, got {type(node).__name__}")
            raise NotImplementedError(f"No emitter for statement kind: {node.kind}")
        method(node)

    def emit_block(self, block: Block) -> None:
        self.indent += 1
        for stmt in block:
            self._visit(stmt)
        self.indent -= 1

    def emit_call(self, node: Call) -> None:
        self.emit_line(node.name)

    def emit_if(self, node: If) -> None:
        self.emit_line(f"IF {node.condition.value} THEN")
        self.emit_block(node.body)
        self.emit_line("END IF")

    def emit_if_else(self, node: IfElse) -> None:
        self.emit_line(f"IF {node.condition.value} THEN")
        self.emit_block(node.body)
        self.emit_line("ELSE")
        self.emit_block(node.else_body)
        self.emit_line("END IF")

    def emit_while(self, node: While) -> None:
        self.emit_line(f"WHILE {node.condition.value} DO")
        self.emit_block(node.body)
        self.emit_line("END WHILE")

    def emit_program(self, program: Program) -> None:
        self.emit_line(f"PROGRAM {program.name} IS")
        self.emit_line("")
        self.indent += 1
        for name, body in program.context.items():
            self.emit_line(f"INSTRUCTION {name} IS")
            self.emit_block(body)
            self.emit_line(f"END {name}")
            self.emit_line("")
        self.indent -= 1
        self.emit_line("BEGIN")
        self.emit_block(program.body)
        self.emit_line(f"END {program.name}")

    def print_program(self, program: Program) -> str:
        if not isinstance(program, Program):
            raise TypeError(f"Expected Program, got {type(program).__name__}")
        self.emit_program(program)
        return self.get_output()

    def print_block(self, block: Block) -> str:
        for stmt in block:
            self._visit(stmt)
        return self.get_output()

    def print_statement(self, stmt: Statement) -> str:
        self._visit(stmt)
        return self.get_output()


def pretty_print(tree: Program | Block | Statement) -> str:
    """Render a `Program`, a block of statements or a single statement as BL source."""
    printer = PrettyPrinter()
    if isinstance(tree, Program):
        return printer.print_program(tree)
    if hasattr(tree, "kind"):
        return printer.print_statement(tree)  # type: ignore[arg-type]
    return printer.print_block(tuple(tree))


__all__ = ["PrettyPrinter", "pretty_print"]
