class GiniError(Exception):
    pass


class IniSyntaxError(GiniError, ValueError):
    """The INI text is malformed.

    Attributes:
        line: The 1-based line of the offending character.
        column: The 1-based column of the offending character.
        expectation: What was expected at that position.
    """

    line: int
    column: int
    expectation: str

    def __init__(self, line: int, column: int, expectation: str):
        self.line = line
        self.column = column
        self.expectation = expectation

        super().__init__(
            f"Syntax error (at {line}:{column}) parsing INI format. {expectation}"
        )
