"""Interactive REPL for the columnar database.

Reads one command per line, executes it, and prints the rendered result.
Blank lines are skipped; ``EXIT`` or end of input stops the loop.
"""

from __future__ import annotations

from typing import TextIO

from columnar_db.application import ColumnarDatabase, ExecutionResult


PROMPT = "dbms> "
EXIT_COMMAND = "EXIT"
COLUMN_WIDTH = 15


def format_rows(columns: list[str], rows: list[list[object]], width: int = COLUMN_WIDTH) -> str:
    """Render rows as fixed-width columns under a header and rule."""
    lines = ["".join(f"{column:<{width}}" for column in columns).rstrip()]
    lines.append("-" * (len(columns) * width))
    for row in rows:
        lines.append(" ".join(f"{str(value):<{width}}" for value in row).rstrip())
    return "\n".join(lines)


def render_result(result: ExecutionResult) -> str:
    """Turn an execution result into display text."""
    if result.error is not None:
        return f"Error: {result.error.message}"
    if result.columns:
        return format_rows(result.columns, [row.values for row in result.rows])
    if result.count is not None:
        return str(result.count)
    if result.tables:
        return "\n".join(result.tables)
    return result.message


def run_repl(db: ColumnarDatabase, stdin: TextIO, stdout: TextIO) -> None:
    """Run the read-eval-print loop until EXIT or end of input.

    Args:
        db: A started database.
        stdin: Line source.
        stdout: Output sink for prompts and results.
    """
    while True:
        stdout.write(PROMPT)
        stdout.flush()

        line = stdin.readline()
        if not line:
            stdout.write("\n")
            break

        text = line.strip()
        if not text:
            continue
        if text == EXIT_COMMAND:
            break

        stdout.write(render_result(db.execute(text)) + "\n")
